from __future__ import annotations

import logging

from flask import Flask, jsonify, request

from ..common.datetime_utils import now_local
from ..common.validators import optional_branch, optional_month, require_year
from ..core.exceptions import DataSourceError, ValidationError
from ..container import Container
from .export import export_indices_csv

logger = logging.getLogger(__name__)


def register(app: Flask, container: Container) -> None:
    def _error(message: str, status: int):
        return jsonify({"success": False, "message": message}), status

    @app.errorhandler(ValidationError)
    def handle_validation_error(e: ValidationError):
        return _error(str(e), 400)

    @app.errorhandler(DataSourceError)
    def handle_data_source_error(e: DataSourceError):
        logger.error("data source unavailable: %s", e)
        return _error("Fuente de datos no disponible", 503)

    @app.route("/api/health", methods=["GET"], endpoint="health")
    def health():
        return jsonify({"success": True, "status": "ok"})

    @app.route("/api/dashboard", methods=["GET"], endpoint="dashboard")
    def dashboard():
        now = now_local()
        year = require_year(request.args.get("year"), default=now.year)
        month = optional_month(request.args.get("month"))
        branch_id = optional_branch(request.args.get("sucursal"))
        compare = request.args.get("compare", "1").strip().lower() not in {"0", "false", "no"}

        report = container.dashboard_service.build(
            year, month=month, branch_id=branch_id, now=now, compare=compare
        )
        return jsonify({"success": True, "data": report.to_dict()})

    @app.route("/api/indices/comparison", methods=["GET"], endpoint="indices_comparison")
    def indices_comparison():
        now = now_local()
        year = require_year(request.args.get("year"), default=now.year)
        branch_id = optional_branch(request.args.get("sucursal"))

        comparison = container.dashboard_service.compare_years(year, branch_id=branch_id, now=now)
        return jsonify({"success": True, "data": comparison.to_dict()})

    @app.route("/api/dashboard.csv", methods=["GET"], endpoint="dashboard_csv")
    def dashboard_csv():
        now = now_local()
        year = require_year(request.args.get("year"), default=now.year)
        month = optional_month(request.args.get("month"))
        branch_id = optional_branch(request.args.get("sucursal"))

        report = container.dashboard_service.build(
            year, month=month, branch_id=branch_id, now=now, compare=True
        )
        suffix = f"{year}{month:02d}" if month else f"{year}"
        filename = f"indices_{branch_id or 'todas'}_{suffix}.csv"
        return app.response_class(
            export_indices_csv(report.index_report.indices, report.comparison),
            mimetype="text/csv",
            headers={"Content-Disposition": f"attachment; filename={filename}"},
        )
