"""
routes/planner.py — Planner page, crop selection and JSON API routes.

Provides:
- GET /              — Planner page (config from query args, summary, preview grid)
- POST /crop         — Select a crop and apply its preset, then redirect to /
- GET /api/plan      — Summary and structured export for a config (JSON API)
- GET /api/presets   — Crop preset table (JSON API)
"""

from flask import Blueprint, render_template, request, redirect, url_for, flash, jsonify, current_app

from crop_presets import CROP_IDS, CROP_PRESETS, DEFAULT_CONFIG, crop_label, presets_as_dicts
from planting_engine import InvalidConfig, generate, plan_summary, preview_grid
from utils.export import to_structured_export
from utils.validators import apply_crop_preset, config_to_args, parse_config, validate_config

planner_bp = Blueprint('planner', __name__)


@planner_bp.route('/')
def index():
    """Planner page — configuration form, summary, preview grid, export links."""
    config, errors = parse_config(request.args)
    for message in errors.values():
        flash(message, "error")

    field_errors = validate_config(config)

    plan = None
    summary = None
    preview = None
    try:
        plan = generate(config)
    except InvalidConfig as e:
        current_app.logger.warning("Invalid planting config: %s", e)
        flash(f"Invalid configuration: {e}", "error")
    else:
        summary = plan_summary(config, plan)
        preview = preview_grid(
            plan,
            max_rows=current_app.config['PREVIEW_MAX_ROWS'],
            max_plants=current_app.config['PREVIEW_MAX_PLANTS'],
        )

    crop_options = [(crop, crop_label(crop)) for crop in CROP_IDS]

    return render_template(
        'planner.html',
        config=config,
        config_args=config_to_args(config),
        field_errors=field_errors,
        plan=plan,
        summary=summary,
        preview=preview,
        crop_options=crop_options,
    )


@planner_bp.route('/crop', methods=['POST'])
def select_crop():
    """Apply the selected crop's preset, keeping the field dimensions."""
    config, _ = parse_config(request.form)
    crop = request.form.get('crop', '').strip().lower() or DEFAULT_CONFIG.crop
    config = apply_crop_preset(config, crop)
    return redirect(url_for('planner.index', **config_to_args(config)))


@planner_bp.route('/api/plan')
def api_plan():
    """Summary plus structured export for the config in the query args (JSON API)."""
    config, errors = parse_config(request.args)
    if config.crop not in CROP_PRESETS:
        errors['crop'] = f"Unknown crop: {config.crop}"
    if errors:
        return jsonify({'success': False, 'errors': errors}), 400

    try:
        plan = generate(config)
    except InvalidConfig as e:
        current_app.logger.warning("Invalid planting config: %s", e)
        return jsonify({'success': False, 'errors': {e.field: str(e)}}), 400

    return jsonify({
        'success': True,
        'summary': plan_summary(config, plan),
        'plan': to_structured_export(config, plan),
    })


@planner_bp.route('/api/presets')
def api_presets():
    """Crop preset table in display order (JSON API)."""
    return jsonify({'success': True, 'presets': presets_as_dicts()})
