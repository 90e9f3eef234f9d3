import csv
import io
import logging
from xml.sax.saxutils import escape
from typing import List, Sequence

from openpyxl import Workbook
from openpyxl.styles import Font, PatternFill
from openpyxl.utils import get_column_letter
from reportlab.lib import colors
from reportlab.lib.pagesizes import A4
from reportlab.lib.styles import getSampleStyleSheet
from reportlab.lib.units import mm
from reportlab.platypus import Paragraph, SimpleDocTemplate, Spacer, Table, TableStyle
from sqlalchemy.orm import Session

from app.crud.asset import asset as crud_asset
from app.models.user import User
from app.services import analytics
from app.utils.dates import as_utc, utc_now

logger = logging.getLogger(__name__)

CSV_HEADERS = [
    "Name",
    "Category",
    "Symbol",
    "Quantity",
    "Acquisition Price",
    "Current Price",
    "Acquisition Date",
    "Currency",
    "Current Value",
    "Acquisition Value",
    "Gain/Loss",
    "Gain/Loss (%)",
    "Notes",
]
CSV_MEDIA_TYPE = "text/csv; charset=utf-8"
EXCEL_MEDIA_TYPE = "application/vnd.openxmlformats-officedocument.spreadsheetml.sheet"
PDF_MEDIA_TYPE = "application/pdf"
UTF8_BOM = "\ufeff"

MIN_COLUMN_WIDTH = 10
MAX_COLUMN_WIDTH = 50
COLUMN_WIDTH_FACTOR = 1.2


def export_filename(extension: str, today=None) -> str:
    today = today or utc_now().date()
    return f"assets-{today.isoformat()}.{extension}"


def _asset_row(asset) -> list:
    value = analytics.current_value(asset)
    cost = analytics.acquisition_value(asset)
    return [
        asset.name,
        asset.category.name if asset.category else asset.category_id,
        asset.symbol or "",
        asset.quantity,
        asset.acquisition_price,
        asset.current_price,
        as_utc(asset.acquisition_date).date().isoformat(),
        asset.currency,
        round(value, 2),
        round(cost, 2),
        round(value - cost, 2),
        round(analytics.percent(value - cost, cost), 2),
        asset.notes or "",
    ]


def build_csv(assets: Sequence) -> str:
    """CSV text of the asset list, BOM-prefixed so spreadsheet apps detect UTF-8."""
    buffer = io.StringIO()
    writer = csv.writer(buffer, quoting=csv.QUOTE_NONNUMERIC, lineterminator="\n")
    writer.writerow(CSV_HEADERS)
    for asset in assets:
        writer.writerow(_asset_row(asset))
    return UTF8_BOM + buffer.getvalue()


def column_width(longest: int) -> float:
    return min(max(MIN_COLUMN_WIDTH, longest * COLUMN_WIDTH_FACTOR), MAX_COLUMN_WIDTH)


def _write_sheet(sheet, headers: List[str], rows: List[list]) -> None:
    sheet.append(headers)
    for cell in sheet[1]:
        cell.font = Font(bold=True)
        cell.fill = PatternFill(start_color="DDEBF7", end_color="DDEBF7", fill_type="solid")
    for row in rows:
        sheet.append(row)

    for index, header in enumerate(headers, start=1):
        longest = max([len(str(header))] + [len(str(row[index - 1])) for row in rows])
        sheet.column_dimensions[get_column_letter(index)].width = column_width(longest)


def build_excel(assets: Sequence) -> bytes:
    """Workbook with the asset list, a category summary and the portfolio totals."""
    now = utc_now()
    summary = analytics.calculate_portfolio_summary(assets, now)

    workbook = Workbook()
    assets_sheet = workbook.active
    assets_sheet.title = "Assets"
    _write_sheet(assets_sheet, CSV_HEADERS, [_asset_row(a) for a in assets])

    _write_sheet(
        workbook.create_sheet("Category Summary"),
        ["Category", "Asset Count", "Current Value", "Acquisition Value", "Gain/Loss", "Gain/Loss (%)", "Allocation (%)"],
        [
            [
                c.category_name,
                c.asset_count,
                round(c.value, 2),
                round(c.acquisition_value, 2),
                round(c.gain_loss, 2),
                round(c.gain_loss_percent, 2),
                round(c.percentage, 2),
            ]
            for c in summary.categories
        ],
    )

    _write_sheet(
        workbook.create_sheet("Portfolio Summary"),
        ["Item", "Value"],
        [
            ["Total Value", round(summary.total_value, 2)],
            ["Total Acquisition Value", round(summary.total_acquisition_value, 2)],
            ["Total Gain/Loss", round(summary.total_gain_loss, 2)],
            ["Total Gain/Loss (%)", round(summary.total_gain_loss_percent, 2)],
            ["Asset Count", summary.asset_count],
            ["Generated At", now.strftime("%Y-%m-%d %H:%M:%S UTC")],
        ],
    )

    output = io.BytesIO()
    workbook.save(output)
    return output.getvalue()


def _table(rows: List[list], col_widths=None) -> Table:
    table = Table(rows, colWidths=col_widths, repeatRows=1)
    table.setStyle(
        TableStyle(
            [
                ("BACKGROUND", (0, 0), (-1, 0), colors.HexColor("#1F2937")),
                ("TEXTCOLOR", (0, 0), (-1, 0), colors.white),
                ("FONTNAME", (0, 0), (-1, 0), "Helvetica-Bold"),
                ("FONTSIZE", (0, 0), (-1, -1), 8),
                ("ALIGN", (1, 1), (-1, -1), "RIGHT"),
                ("GRID", (0, 0), (-1, -1), 0.25, colors.grey),
                ("ROWBACKGROUNDS", (0, 1), (-1, -1), [colors.white, colors.HexColor("#F3F4F6")]),
            ]
        )
    )
    return table


def _money(value: float) -> str:
    return f"{value:,.2f}"


def build_pdf(assets: Sequence, owner_name: str = "") -> bytes:
    """A4 portfolio report; tables continue onto new pages with their header rows repeated."""
    now = utc_now()
    summary = analytics.calculate_portfolio_summary(assets, now)
    styles = getSampleStyleSheet()

    story = [
        Paragraph("Portfolio Report", styles["Title"]),
        Paragraph(f"Generated {now.strftime('%Y-%m-%d %H:%M UTC')}" + (f" for {escape(owner_name)}" if owner_name else ""), styles["Normal"]),
        Spacer(1, 6 * mm),
        Paragraph("Summary", styles["Heading2"]),
        _table(
            [
                ["Total Value", "Acquisition Value", "Gain/Loss", "Gain/Loss (%)", "Assets"],
                [
                    _money(summary.total_value),
                    _money(summary.total_acquisition_value),
                    _money(summary.total_gain_loss),
                    f"{summary.total_gain_loss_percent:.2f}%",
                    str(summary.asset_count),
                ],
            ]
        ),
        Spacer(1, 6 * mm),
        Paragraph("Categories", styles["Heading2"]),
        _table(
            [["Category", "Assets", "Value", "Gain/Loss", "Gain/Loss (%)", "Allocation (%)"]]
            + [
                [
                    c.category_name,
                    str(c.asset_count),
                    _money(c.value),
                    _money(c.gain_loss),
                    f"{c.gain_loss_percent:.2f}%",
                    f"{c.percentage:.2f}%",
                ]
                for c in summary.categories
            ]
        ),
        Spacer(1, 6 * mm),
        Paragraph("Assets", styles["Heading2"]),
    ]

    asset_rows = [["Name", "Category", "Quantity", "Current Price", "Value", "Gain/Loss", "Gain/Loss (%)"]]
    for asset in assets:
        value = analytics.current_value(asset)
        cost = analytics.acquisition_value(asset)
        asset_rows.append(
            [
                Paragraph(escape(asset.name), styles["BodyText"]),
                asset.category.name if asset.category else asset.category_id,
                f"{asset.quantity:g}",
                _money(asset.current_price),
                _money(value),
                _money(value - cost),
                f"{analytics.percent(value - cost, cost):.2f}%",
            ]
        )
    story.append(_table(asset_rows, col_widths=[50 * mm, 28 * mm, 18 * mm, 22 * mm, 24 * mm, 24 * mm, 18 * mm]))

    output = io.BytesIO()
    document = SimpleDocTemplate(
        output,
        pagesize=A4,
        title="Portfolio Report",
        leftMargin=12 * mm,
        rightMargin=12 * mm,
        topMargin=15 * mm,
        bottomMargin=15 * mm,
    )
    document.build(story)
    return output.getvalue()


class ExportService:
    def export_csv(self, db: Session, *, user: User) -> str:
        assets = crud_asset.get_all_by_user(db, user_id=user.id)
        logger.info(f"Exporting {len(assets)} assets as CSV for user {user.id}")
        return build_csv(assets)

    def export_excel(self, db: Session, *, user: User) -> bytes:
        assets = crud_asset.get_all_by_user(db, user_id=user.id)
        logger.info(f"Exporting {len(assets)} assets as Excel for user {user.id}")
        return build_excel(assets)

    def export_pdf(self, db: Session, *, user: User) -> bytes:
        assets = crud_asset.get_all_by_user(db, user_id=user.id)
        logger.info(f"Exporting {len(assets)} assets as PDF for user {user.id}")
        return build_pdf(assets, owner_name=user.name)


export_service = ExportService()
