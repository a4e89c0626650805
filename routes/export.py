"""
routes/export.py — Planting plan download routes.

Provides:
- GET /export/json   — Download the plan as JSON
- GET /export/csv    — Download the plan as CSV
- GET /export/excel  — Download the plan as an Excel workbook

The config comes from the query args, as on the planner page. Invalid
configs are refused with a flash message and a redirect back to the planner.
"""

from io import BytesIO

from flask import Blueprint, flash, redirect, url_for, send_file, request, current_app

from crop_presets import CROP_PRESETS
from planting_engine import InvalidConfig, generate
from utils.export import export_filename, generate_excel, to_json_text, to_tabular_export
from utils.validators import config_to_args, parse_config

export_bp = Blueprint('export', __name__, url_prefix='/export')


def _load_plan():
    """
    Parse the request config and generate its plan.

    Only crops from the preset table are exported.

    Returns:
        (config, plan) on success, (config, None) after flashing the problem.
    """
    config, errors = parse_config(request.args)
    if config.crop not in CROP_PRESETS:
        errors['crop'] = f"Unknown crop: {config.crop}"
    if errors:
        current_app.logger.warning("Export refused, invalid planting config: %s", errors)
        for message in errors.values():
            flash(message, "error")
        return config, None

    try:
        return config, generate(config)
    except InvalidConfig as e:
        current_app.logger.warning("Export refused, invalid planting config: %s", e)
        flash(f"Export refused: {e}", "error")
        return config, None


def _back_to_planner(config):
    return redirect(url_for('planner.index', **config_to_args(config)))


def _download(payload, filename, mimetype):
    return send_file(
        BytesIO(payload.encode('utf-8')),
        as_attachment=True,
        download_name=filename,
        mimetype=mimetype
    )


@export_bp.route('/json')
def export_json():
    """Export the plan as a JSON file."""
    config, plan = _load_plan()
    if plan is None:
        return _back_to_planner(config)

    filename = export_filename(config, 'json')
    current_app.logger.info("Exporting %s (%d waypoints)", filename, plan.total_plants)
    return _download(to_json_text(config, plan), filename, 'application/json')


@export_bp.route('/csv')
def export_csv():
    """Export the plan as a CSV file."""
    config, plan = _load_plan()
    if plan is None:
        return _back_to_planner(config)

    filename = export_filename(config, 'csv')
    current_app.logger.info("Exporting %s (%d waypoints)", filename, plan.total_plants)
    return _download(to_tabular_export(config, plan), filename, 'text/csv')


@export_bp.route('/excel')
def export_excel():
    """Export the plan as an Excel workbook."""
    config, plan = _load_plan()
    if plan is None:
        return _back_to_planner(config)

    buffer, filename = generate_excel(config, plan)
    current_app.logger.info("Exporting %s (%d waypoints)", filename, plan.total_plants)
    return send_file(
        buffer,
        as_attachment=True,
        download_name=filename,
        mimetype='application/vnd.openxmlformats-officedocument.spreadsheetml.sheet'
    )
