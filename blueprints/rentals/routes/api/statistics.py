"""
Statistics API routes: daily summary, period summary and its Excel export.
"""

import io

from flask import Response, request
from openpyxl import Workbook
from openpyxl.styles import Alignment, Border, Font, PatternFill, Side

from models.statistics import get_daily_stats, get_period_stats
from utils.api_response import api_success
from utils.datetime_helpers import get_today


DEFAULT_PERIOD_DAYS = 7


def register_routes(bp):
    """Register statistics API routes on the blueprint."""

    @bp.route('/statistics/daily', methods=['GET'])
    def daily_stats():
        """Reservations, people and slot occupancy for ?date= (default today)."""
        date_str = request.args.get('date') or get_today().strftime('%Y-%m-%d')
        return api_success(data=get_daily_stats(date_str))

    @bp.route('/statistics/period', methods=['GET'])
    def period_stats():
        """
        Summary over the ?days= (default 7) dates ending at ?end_date=.
        """
        end_date = request.args.get('end_date') or get_today().strftime('%Y-%m-%d')
        days = request.args.get('days', DEFAULT_PERIOD_DAYS, type=int)
        return api_success(data=get_period_stats(end_date, days))

    @bp.route('/statistics/period/export', methods=['GET'])
    def export_period_stats():
        """Excel download of the period summary."""
        end_date = request.args.get('end_date') or get_today().strftime('%Y-%m-%d')
        days = request.args.get('days', DEFAULT_PERIOD_DAYS, type=int)
        stats = get_period_stats(end_date, days)

        filename = f"canoe_statistics_{stats['start_date']}_{stats['end_date']}.xlsx"
        return Response(
            build_period_workbook(stats),
            mimetype='application/vnd.openxmlformats-officedocument.spreadsheetml.sheet',
            headers={'Content-Disposition': f'attachment; filename={filename}'}
        )


def build_period_workbook(stats: dict) -> bytes:
    """
    Render period statistics as an .xlsx file.

    Args:
        stats: Result of get_period_stats()

    Returns:
        bytes: Workbook content
    """
    wb = Workbook()
    ws = wb.active
    ws.title = "Statistics"

    # Styles
    header_font = Font(bold=True, color="FFFFFF", size=11)
    header_fill = PatternFill(
        start_color="1A3A5C", end_color="1A3A5C", fill_type="solid"
    )
    header_alignment = Alignment(
        horizontal="center", vertical="center", wrap_text=True
    )
    thin_border = Border(
        left=Side(style='thin', color="D4D4D4"),
        right=Side(style='thin', color="D4D4D4"),
        top=Side(style='thin', color="D4D4D4"),
        bottom=Side(style='thin', color="D4D4D4")
    )
    center_alignment = Alignment(horizontal="center", vertical="center")
    alt_fill = PatternFill(
        start_color="F5F5F5", end_color="F5F5F5", fill_type="solid"
    )

    # Title row
    ws.merge_cells('A1:F1')
    title_cell = ws.cell(
        row=1, column=1,
        value=f"Canoe rentals - {stats['start_date']} to {stats['end_date']}"
    )
    title_cell.font = Font(bold=True, size=14, color="1A3A5C")
    title_cell.alignment = center_alignment

    # Summary line
    busiest = stats['busiest_day']
    summary_parts = [
        f"Reservations: {stats['total_reservations']}",
        f"People: {stats['total_people']}",
        f"Average occupancy: {stats['average_occupancy']:.1f}%",
        f"Busiest day: {busiest['date'] if busiest else '-'}",
    ]
    ws.merge_cells('A2:F2')
    summary_cell = ws.cell(row=2, column=1, value=" | ".join(summary_parts))
    summary_cell.font = Font(size=10, color="666666")
    summary_cell.alignment = center_alignment

    # Headers (row 4)
    header_row = 4
    headers = [
        "Date", "Reservations", "People",
        "Morning %", "Afternoon %", "Full day %"
    ]
    for col, header in enumerate(headers, 1):
        cell = ws.cell(row=header_row, column=col, value=header)
        cell.font = header_font
        cell.fill = header_fill
        cell.alignment = header_alignment
        cell.border = thin_border

    ws.freeze_panes = f'A{header_row + 1}'

    # Data rows
    for row_idx, day in enumerate(stats['daily'], header_row + 1):
        values = [
            day['date'],
            day['total_reservations'],
            day['total_people'],
            round(day['morning_occupancy'], 1),
            round(day['afternoon_occupancy'], 1),
            round(day['full_day_occupancy'], 1),
        ]
        is_alt = (row_idx - header_row) % 2 == 0
        for col, value in enumerate(values, 1):
            cell = ws.cell(row=row_idx, column=col, value=value)
            cell.border = thin_border
            cell.alignment = center_alignment
            if is_alt:
                cell.fill = alt_fill

    column_widths = {'A': 14, 'B': 14, 'C': 10, 'D': 12, 'E': 13, 'F': 12}
    for letter, width in column_widths.items():
        ws.column_dimensions[letter].width = width

    output = io.BytesIO()
    wb.save(output)
    return output.getvalue()
