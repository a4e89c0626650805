"""
utils/export.py — Planting plan export generation.

Three formats for robot-control tooling:
- JSON: plan metadata plus the numbered robot path
- CSV: one row per waypoint (Sequence, X (cm), Y (cm), Action, Crop, Depth (cm))
- Excel: summary sheet plus a styled robot-path sheet (openpyxl)

Field names, column headers and their order are consumed by downstream
tooling and must not change. Output is byte-stable for identical input.
"""

import json
from io import BytesIO

from openpyxl.styles import Font, PatternFill, Alignment, Border, Side

from models import ExportRecord, Waypoint


PLANT_ACTION = 'plant'

TABULAR_HEADERS = ['Sequence', 'X (cm)', 'Y (cm)', 'Action', 'Crop', 'Depth (cm)']

HEADER_FONT = Font(name='Calibri', bold=True, color='FFFFFF', size=11)
HEADER_FILL = PatternFill(start_color='2E7D32', end_color='2E7D32', fill_type='solid')
HEADER_ALIGNMENT = Alignment(horizontal='center', vertical='center', wrap_text=True)
HEADER_BORDER = Border(
    bottom=Side(style='thin', color='1B5E20'),
    right=Side(style='thin', color='E2E8F0'),
)
CELL_BORDER = Border(
    bottom=Side(style='thin', color='E2E8F0'),
    right=Side(style='thin', color='E2E8F0'),
)
# Alternate fill for odd (reverse-direction) rows on the path sheet
REVERSE_ROW_FILL = PatternFill(start_color='F1F8E9', end_color='F1F8E9', fill_type='solid')


def _plain_number(value):
    """Integral floats become ints so 60.0 is written as 60."""
    if isinstance(value, float) and value.is_integer():
        return int(value)
    return value


def _format_number(value):
    return str(_plain_number(value))


def export_filename(config, extension):
    """Download filename, e.g. planting-plan-maize.json."""
    return f"planting-plan-{config.crop}.{extension}"


def export_records(config, plan):
    """Numbered, denormalized view of the robot path (sequence is 1-based)."""
    return [
        ExportRecord(
            sequence=index,
            x=waypoint.x,
            y=waypoint.y,
            crop=config.crop,
            depth=config.planting_depth,
            action=PLANT_ACTION,
        )
        for index, waypoint in enumerate(plan.robot_path, 1)
    ]


def to_structured_export(config, plan):
    """
    Build the structured export record.

    Returns:
        Dict with keys crop, row_spacing_cm, plant_spacing_cm,
        planting_depth_cm, field_width_cm, field_length_cm, total_rows,
        plants_per_row, total_plants, robot_path (list of
        {sequence, x_cm, y_cm, action}).
    """
    return {
        'crop': config.crop,
        'row_spacing_cm': _plain_number(config.row_spacing),
        'plant_spacing_cm': _plain_number(config.plant_spacing),
        'planting_depth_cm': _plain_number(config.planting_depth),
        'field_width_cm': _plain_number(config.field_width),
        'field_length_cm': _plain_number(config.field_length),
        'total_rows': plan.rows,
        'plants_per_row': plan.plants_per_row,
        'total_plants': plan.total_plants,
        'robot_path': [
            {
                'sequence': record.sequence,
                'x_cm': _plain_number(record.x),
                'y_cm': _plain_number(record.y),
                'action': record.action,
            }
            for record in export_records(config, plan)
        ],
    }


def to_json_text(config, plan):
    """Structured export as JSON text, indented by two spaces."""
    return json.dumps(to_structured_export(config, plan), indent=2, ensure_ascii=False)


def parse_structured_path(data):
    """Read the robot path of a structured export back into waypoints."""
    if isinstance(data, (str, bytes)):
        data = json.loads(data)
    entries = sorted(data.get('robot_path', []), key=lambda e: e['sequence'])
    return [Waypoint(x=entry['x_cm'], y=entry['y_cm']) for entry in entries]


def to_tabular_export(config, plan):
    """
    Build the CSV export: header row plus one row per waypoint.

    Rows are joined with '\\n' and there is no trailing newline.
    """
    lines = [','.join(TABULAR_HEADERS)]
    for record in export_records(config, plan):
        lines.append(','.join([
            str(record.sequence),
            _format_number(record.x),
            _format_number(record.y),
            record.action,
            record.crop,
            _format_number(record.depth),
        ]))
    return '\n'.join(lines)


def _style_header(ws, columns):
    for col_idx, col_name in enumerate(columns, 1):
        cell = ws.cell(row=1, column=col_idx, value=col_name)
        cell.font = HEADER_FONT
        cell.fill = HEADER_FILL
        cell.alignment = HEADER_ALIGNMENT
        cell.border = HEADER_BORDER


def _build_summary_sheet(ws, config, plan):
    """Populate the summary sheet with plan metadata as key/value rows."""
    _style_header(ws, ['Field', 'Value'])

    summary = to_structured_export(config, plan)
    del summary['robot_path']

    for row_idx, (key, value) in enumerate(summary.items(), 2):
        ws.cell(row=row_idx, column=1, value=key).border = CELL_BORDER
        ws.cell(row=row_idx, column=2, value=value).border = CELL_BORDER

    ws.column_dimensions['A'].width = 22
    ws.column_dimensions['B'].width = 16
    ws.freeze_panes = 'A2'


def _build_path_sheet(ws, config, plan):
    """Populate the robot path sheet, shading reverse-direction rows."""
    _style_header(ws, TABULAR_HEADERS)

    per_row = plan.plants_per_row or 1
    for row_idx, record in enumerate(export_records(config, plan), 2):
        values = [
            record.sequence,
            _plain_number(record.x),
            _plain_number(record.y),
            record.action,
            record.crop,
            _plain_number(record.depth),
        ]
        grid_row = (record.sequence - 1) // per_row
        for col_idx, value in enumerate(values, 1):
            cell = ws.cell(row=row_idx, column=col_idx, value=value)
            cell.border = CELL_BORDER
            if grid_row % 2 == 1:
                cell.fill = REVERSE_ROW_FILL

    for letter, width in zip('ABCDEF', (12, 10, 10, 10, 14, 12)):
        ws.column_dimensions[letter].width = width

    # Freeze header row
    ws.freeze_panes = 'A2'


def generate_excel(config, plan):
    """
    Generate an Excel workbook for a planting plan.

    Returns:
        (BytesIO buffer, filename)
    """
    import openpyxl

    wb = openpyxl.Workbook()
    summary_ws = wb.active
    summary_ws.title = 'Summary'
    _build_summary_sheet(summary_ws, config, plan)

    path_ws = wb.create_sheet(title='Robot Path')
    _build_path_sheet(path_ws, config, plan)

    buffer = BytesIO()
    wb.save(buffer)
    buffer.seek(0)

    return buffer, export_filename(config, 'xlsx')
