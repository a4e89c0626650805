"""
app.py — Flask entry point for the smart planting planner.

Initializes the Flask app, registers the planner and export blueprints,
and adds the `export-plan` CLI command for batch mission files.

Run: python app.py → localhost:5000
CLI: flask --app app export-plan --crop maize --format json --output plan.json
"""

import os

import click
from flask import Flask
from flask_wtf.csrf import CSRFProtect

from crop_presets import CROP_IDS, DEFAULT_CONFIG
from planting_engine import InvalidConfig, PREVIEW_MAX_PLANTS, PREVIEW_MAX_ROWS, generate
from routes.planner import planner_bp
from routes.export import export_bp
from utils.export import export_filename, generate_excel, to_json_text, to_tabular_export
from utils.validators import apply_crop_preset, update_field


def create_app(test_config=None):
    """Create and configure the Flask application."""
    app = Flask(__name__)
    app.secret_key = os.environ.get('SECRET_KEY', 'smart-planting-planner-local-secret-key')
    app.config['WTF_CSRF_CHECK_DEFAULT'] = True
    app.config['TEMPLATES_AUTO_RELOAD'] = True
    app.config['PREVIEW_MAX_ROWS'] = PREVIEW_MAX_ROWS
    app.config['PREVIEW_MAX_PLANTS'] = PREVIEW_MAX_PLANTS

    if test_config:
        app.config.update(test_config)

    csrf = CSRFProtect(app)

    # Register blueprints
    app.register_blueprint(planner_bp)
    app.register_blueprint(export_bp)

    app.cli.add_command(export_plan_command)

    return app


@click.command('export-plan')
@click.option('--crop', type=click.Choice(CROP_IDS), default=DEFAULT_CONFIG.crop, show_default=True,
              help='Crop preset to seed spacing and depth from.')
@click.option('--row-spacing', type=float, help='Override row spacing (cm).')
@click.option('--plant-spacing', type=float, help='Override plant spacing (cm).')
@click.option('--planting-depth', type=float, help='Override planting depth (cm).')
@click.option('--field-width', type=float, default=DEFAULT_CONFIG.field_width, show_default=True,
              help='Field width across the rows (cm).')
@click.option('--field-length', type=float, default=DEFAULT_CONFIG.field_length, show_default=True,
              help='Field length along each row (cm).')
@click.option('--format', 'fmt', type=click.Choice(['json', 'csv', 'xlsx']), default='json',
              show_default=True)
@click.option('--output', type=click.Path(dir_okay=False, writable=True),
              help='File to write. Defaults to planting-plan-<crop>.<format>.')
def export_plan_command(crop, row_spacing, plant_spacing, planting_depth,
                        field_width, field_length, fmt, output):
    """Generate a planting plan and write it as a robot mission file."""
    config = apply_crop_preset(DEFAULT_CONFIG, crop)
    overrides = {
        'row_spacing': row_spacing,
        'plant_spacing': plant_spacing,
        'planting_depth': planting_depth,
        'field_width': field_width,
        'field_length': field_length,
    }
    for name, value in overrides.items():
        if value is not None:
            if value.is_integer():
                value = int(value)
            config = update_field(config, name, value)

    try:
        plan = generate(config)
    except InvalidConfig as e:
        raise click.BadParameter(str(e), param_hint=f"--{e.field.replace('_', '-')}")

    if fmt == 'xlsx':
        buffer, filename = generate_excel(config, plan)
        with open(output or filename, 'wb') as f:
            f.write(buffer.getvalue())
    else:
        payload = to_json_text(config, plan) if fmt == 'json' else to_tabular_export(config, plan)
        filename = export_filename(config, fmt)
        with open(output or filename, 'w', encoding='utf-8', newline='') as f:
            f.write(payload)

    click.echo(f"{plan.total_plants} waypoints ({plan.rows} rows × {plan.plants_per_row}) "
               f"written to {output or filename}")


if __name__ == '__main__':
    app = create_app()
    # Debug mode: enabled by default for development (auto-reload on file changes)
    # Set FLASK_DEBUG=0 to disable for production
    debug = os.environ.get('FLASK_DEBUG', '1') != '0'
    app.run(host='localhost', port=5000, debug=debug)
