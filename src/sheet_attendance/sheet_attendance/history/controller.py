from __future__ import annotations

import io

from flask import Flask, request, send_file

from ..common.http import domain_error, ok, server_error
from ..container import Container
from ..core.exceptions import DomainError


def register(app: Flask, container: Container) -> None:
    svc = container.history_service

    @app.route("/api/history", methods=["GET"], endpoint="history_list")
    def history():
        try:
            records = svc.list_history()
            return ok("History records retrieved successfully", data=[r.to_dict() for r in records])
        except DomainError as e:
            return domain_error(e, "Failed to fetch history")
        except Exception as e:
            return server_error("Failed to fetch history", e)

    @app.route("/api/history/event", methods=["GET"], endpoint="history_event")
    def history_event():
        try:
            details, cached = svc.event_details(request.args.get("sheet_link"))
            message = "Event details retrieved from cache" if cached else "Event details fetched successfully"
            return ok(message, cached=cached, data=details.to_dict())
        except DomainError as e:
            return domain_error(e, "Failed to fetch event details")
        except Exception as e:
            return server_error("Failed to fetch event details", e)

    @app.route("/api/history/event/export", methods=["GET"], endpoint="history_event_export")
    def history_event_export():
        try:
            file = svc.export_event(request.args.get("spreadsheet_id"))
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
