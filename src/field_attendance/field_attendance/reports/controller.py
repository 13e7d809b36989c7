from __future__ import annotations

from datetime import date

from flask import Flask, jsonify

from ..common.datetime_utils import format_day, parse_iso_date
from ..common.web import admin_required
from ..container import Container
from ..core.exceptions import ValidationError


def _parse_day(value: str) -> date:
    try:
        return parse_iso_date(value)
    except ValueError:
        raise ValidationError("Tanggal harus berformat YYYY-MM-DD")


def register(app: Flask, container: Container) -> None:
    @app.route("/api/admin/reports/daily", methods=["GET"], endpoint="daily_report")
    @admin_required
    def daily_report():
        return jsonify({"days": container.report_service.daily_index()})

    @app.route("/api/admin/reports/daily/<day>", methods=["GET"], endpoint="daily_report_detail")
    @admin_required
    def daily_report_detail(day: str):
        work_date = _parse_day(day)
        records = container.report_service.records_for_date(work_date)
        return jsonify(
            {
                "date": format_day(work_date),
                "count": len(records),
                "records": [r.to_dict(include_photo=False) for r in records],
            }
        )

    @app.route("/api/admin/reports/daily/<day>/export", methods=["GET"], endpoint="daily_report_csv")
    @admin_required
    def daily_report_csv(day: str):
        filename, text = container.report_service.export_date(_parse_day(day))
        return app.response_class(
            text.encode("utf-8-sig"),
            mimetype="text/csv",
            headers={"Content-Disposition": f"attachment; filename={filename}"},
        )
