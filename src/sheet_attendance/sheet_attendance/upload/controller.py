from __future__ import annotations

from flask import Flask

from ..common.http import domain_error, json_body, ok, server_error
from ..container import Container
from ..core.exceptions import DomainError


def register(app: Flask, container: Container) -> None:
    svc = container.upload_service

    @app.route("/api/upload/validate", methods=["POST"], endpoint="upload_validate")
    def validate_sheet():
        body = json_body()
        # Both spellings are accepted by older clients.
        sheet_link = body.get("sheetlink") or body.get("sheet_link")
        try:
            report = svc.validate(sheet_link)
            return ok(
                "Sheet validation successful",
                rows_validated=report.rows_validated,
                spreadsheet_id=report.spreadsheet_id,
            )
        except DomainError as e:
            return domain_error(e, "Error validating sheet")
        except Exception as e:
            return server_error("Error validating sheet", e)

    @app.route("/api/upload/uploadSheet", methods=["POST"], endpoint="upload_sheet")
    def upload_sheet():
        body = json_body()
        try:
            record = svc.upload(
                body.get("sheet_link") or body.get("sheetlink"),
                event_name=body.get("event_name"),
                uploaded_by=body.get("uploaded_by"),
            )
            return ok("Sheet uploaded to history successfully", data=record.to_dict())
        except DomainError as e:
            return domain_error(e, "Error uploading sheet to history")
        except Exception as e:
            return server_error("Error uploading sheet to history", e)
