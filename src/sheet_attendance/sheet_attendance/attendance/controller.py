from __future__ import annotations

import io

from flask import Flask, request, send_file, session

from ..common.http import domain_error, json_body, ok, server_error
from ..container import Container
from ..core.exceptions import DomainError


def register(app: Flask, container: Container) -> None:
    svc = container.attendance_service

    @app.route("/api/attendance", methods=["GET"], endpoint="attendance_information")
    def information():
        try:
            info = svc.get_information(request.args.get("sheet_link"))
            if info.cached:
                return ok("Sheet details retrieved from cache", cached=True, data=info.snapshot.to_dict())
            return ok(
                "Sheet details fetched successfully",
                cached=False,
                commit_column_added=info.commit_column_added,
                columns_added=list(info.columns_added),
                data=info.snapshot.to_dict(),
            )
        except DomainError as e:
            return domain_error(e, "Failed to fetch sheet information")
        except Exception as e:
            return server_error("Failed to fetch sheet information", e)

    @app.route("/api/attendance/cache", methods=["DELETE"], endpoint="attendance_clear_cache")
    def clear_cache():
        try:
            spreadsheet_id = json_body().get("spreadsheet_id") or request.args.get("spreadsheet_id")
            if spreadsheet_id:
                svc.clear_cache(spreadsheet_id)
                return ok("Cache cleared for specified sheet")
            cleared = svc.clear_cache()
            return ok("All cache cleared", cleared=cleared)
        except DomainError as e:
            return domain_error(e, "Failed to clear cache")
        except Exception as e:
            return server_error("Failed to clear cache", e)

    @app.route("/api/attendance/display", methods=["GET"], endpoint="attendance_display")
    def display():
        try:
            data = svc.display(request.args.get("spreadsheet_id"))
            return ok(
                "Display data retrieved successfully",
                data={
                    **data.summary.to_dict(),
                    "students": [s.to_dict() for s in data.students],
                },
            )
        except DomainError as e:
            return domain_error(e, "Failed to display sheet data")
        except Exception as e:
            return server_error("Failed to display sheet data", e)

    @app.route("/api/attendance/commit", methods=["POST"], endpoint="attendance_commit")
    def commit():
        body = json_body()
        try:
            result = svc.commit(
                body.get("spreadsheet_id"),
                body.get("roll_numbers"),
                marked_by=body.get("marked_by") or body.get("username") or session.get("username"),
            )
            return ok(
                result.message,
                data={
                    "updated_count": result.updated_count,
                    "committed_roll_numbers": result.committed,
                    "already_committed": result.already_committed,
                    "not_found": result.not_found,
                },
            )
        except DomainError as e:
            return domain_error(e, "Failed to commit attendance")
        except Exception as e:
            return server_error("Failed to commit attendance", e)

    @app.route("/api/attendance/addonspot", methods=["POST"], endpoint="attendance_add_on_spot")
    def add_on_spot():
        body = json_body()
        try:
            student = svc.add_on_spot(
                body.get("spreadsheet_id"),
                name=body.get("name"),
                roll_number=body.get("roll_number"),
                mail_id=body.get("mail_id"),
                department=body.get("department"),
                marked_by=body.get("marked_by") or body.get("username") or session.get("username", ""),
            )
            return ok("Student added on-spot successfully", data=student.to_dict())
        except DomainError as e:
            return domain_error(e, "Failed to add student on-spot")
        except Exception as e:
            return server_error("Failed to add student on-spot", e)

    @app.route("/api/attendance/export", methods=["GET"], endpoint="attendance_export")
    def export():
        try:
            file = svc.export(request.args.get("spreadsheet_id"))
        except DomainError as e:
            return domain_error(e, "Failed to export attendance")
        except Exception as e:
            return server_error("Failed to export attendance", e)

        return send_file(
            io.BytesIO(file.content),
            mimetype="application/zip",
            as_attachment=True,
            download_name=file.filename,
        )
