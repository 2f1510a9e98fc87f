from __future__ import annotations

from flask import Flask, session

from ..common.http import domain_error, json_body, ok, server_error
from ..container import Container
from ..core.exceptions import DomainError


def register(app: Flask, container: Container) -> None:
    @app.route("/api/login", methods=["POST"], endpoint="login")
    def login():
        body = json_body()
        try:
            user = container.auth_service.authenticate(body.get("username"), body.get("password"))
        except DomainError as e:
            return domain_error(e)
        except Exception as e:
            return server_error("Server error", e)

        session["username"] = user.username
        session["is_admin"] = user.is_admin
        return ok("Login successful", user=user.to_profile(), admin=user.is_admin)

    @app.route("/api/logout", methods=["POST"], endpoint="logout")
    def logout():
        session.clear()
        return ok("Logged out")

    @app.route("/api/createuser", methods=["POST"], endpoint="create_user")
    def create_user():
        body = json_body()
        try:
            container.user_service.create_user(
                username=body.get("username"),
                name=body.get("name"),
                password=body.get("password"),
                roll_number=body.get("roll_number"),
                department=body.get("department"),
                team=body.get("team"),
                role=body.get("role"),
            )
            return ok("User created successfully", 201)
        except DomainError as e:
            return domain_error(e, "Failed to create user")
        except Exception as e:
            return server_error("Failed to create user", e)

    @app.route("/api/profile", methods=["POST"], endpoint="profile")
    def profile():
        body = json_body()
        try:
            user = container.profile_service.get_profile(body.get("username") or session.get("username"))
            return ok("Profile retrieved successfully", user=user.to_profile())
        except DomainError as e:
            return domain_error(e)
        except Exception as e:
            return server_error("Server error", e)

    @app.route("/api/profile/getsession", methods=["POST"], endpoint="profile_sessions")
    def sessions():
        body = json_body()
        try:
            records = container.history_service.sessions_for(body.get("username") or session.get("username"))
            return ok("Sessions retrieved successfully", sessions=[r.to_dict() for r in records])
        except DomainError as e:
            return domain_error(e, "Failed to fetch sessions")
        except Exception as e:
            return server_error("Failed to fetch sessions", e)

    @app.route("/api/profile/close", methods=["POST"], endpoint="profile_close_session")
    def close_session():
        body = json_body()
        try:
            record = container.history_service.close_session(
                body.get("sheet_id") or body.get("spreadsheet_id"),
                username=body.get("username") or session.get("username"),
            )
            return ok("Session closed successfully", data=record.to_dict())
        except DomainError as e:
            return domain_error(e, "Failed to close session")
        except Exception as e:
            return server_error("Failed to close session", e)
