"""Export of the dashboard to a PDF report and an Excel workbook."""

from __future__ import annotations

from collections.abc import Callable, Mapping, Sequence
from io import BytesIO

import pandas as pd
import plotly.graph_objects as go
from openpyxl.utils import get_column_letter
from reportlab.lib.pagesizes import A4
from reportlab.lib.units import mm
from reportlab.lib.utils import ImageReader
from reportlab.pdfgen import canvas

from . import utils
from .logging_setup import get_logger
from .normalize import FEE_COLUMNS

logger = get_logger(__name__)

REPORT_REGIONS = ("report1", "report2")
PAGE_MARGIN = 10 * mm
IMAGE_WIDTH = 190 * mm

SHEET_NAME = "Laporan Transaksi"
EXPORT_COLUMNS: dict[str, str] = {
    "id": "ID Transaksi",
    "product_name": "Nama Produk",
    "product_device_id": "Device ID",
    "product_price": "Harga",
    "product_location": "Lokasi",
    "product_sku": "SKU",
    "payment_amount": "Jumlah",
    "payment_method": "Metode Pembayaran",
    "payment_nett": "Nett",
    "payment_fee_platform_sharing_revenue": "Fee Platform Sharing Revenue",
    "payment_fee_mdr_qris": "Fee MDR QRIS",
    "transaction_id": "Transaction ID",
    "transaction_status": "Status Transaksi",
    "transaction_time": "Waktu Transaksi",
    "order_id": "Order ID",
    "issuer": "Issuer",
    "date": "Tanggal",
}
MAX_COLUMN_WIDTH = 48


class ExportError(RuntimeError):
    """Raised when a report artifact cannot be produced."""


def capture_figure(fig: go.Figure) -> bytes:
    """Render a chart region to PNG bytes (requires kaleido)."""

    return fig.to_image(format="png", scale=2)


def build_pdf_report(
    regions: Mapping[str, go.Figure | None],
    *,
    names: Sequence[str] = REPORT_REGIONS,
    capture: Callable[[go.Figure], bytes] = capture_figure,
) -> bytes | None:
    """Place each named region on its own A4 page, 190 mm wide.

    Regions are captured one after another in ``names`` order. A missing
    region is logged and skipped; ``None`` is returned when nothing could be
    placed.
    """

    buffer = BytesIO()
    pdf = canvas.Canvas(buffer, pagesize=A4)
    _, page_height = A4
    pages = 0

    for name in names:
        fig = regions.get(name)
        if fig is None:
            logger.warning('Report region "%s" not found; skipping its page', name)
            continue

        try:
            png = capture(fig)
        except Exception as exc:
            raise ExportError(f'Could not capture report region "{name}"') from exc

        image = ImageReader(BytesIO(png))
        width_px, height_px = image.getSize()
        if not width_px:
            raise ExportError(f'Report region "{name}" rendered an empty image')
        height = IMAGE_WIDTH * height_px / width_px

        pdf.drawImage(image, PAGE_MARGIN, page_height - PAGE_MARGIN - height, IMAGE_WIDTH, height)
        pdf.showPage()
        pages += 1

    if not pages:
        logger.error("No report regions available; PDF not generated")
        return None

    pdf.save()
    data = buffer.getvalue()
    logger.info("Built PDF report with %d page(s), %d bytes", pages, len(data))
    return data


def export_frame(rows: pd.DataFrame) -> pd.DataFrame:
    """Select and label the exported columns; unknown fees become blanks."""

    df = utils.ensure_dataframe(rows)
    frame = df.reindex(columns=list(EXPORT_COLUMNS))
    for column in FEE_COLUMNS:
        values = frame[column].astype(object)
        frame[column] = values.where(values.notna(), None)
    return frame.rename(columns=EXPORT_COLUMNS)


def build_excel_report(rows: pd.DataFrame, *, sheet_name: str = SHEET_NAME) -> bytes:
    """Serialise every row to a single-sheet workbook."""

    frame = export_frame(rows)
    buffer = BytesIO()
    with pd.ExcelWriter(buffer, engine="openpyxl") as writer:
        frame.to_excel(writer, sheet_name=sheet_name, index=False)
        sheet = writer.sheets[sheet_name]
        sheet.freeze_panes = "A2"
        # Payload text starting with "=" is stored as text, never as a formula.
        for row in sheet.iter_rows(min_row=2):
            for cell in row:
                if cell.data_type == "f":
                    cell.data_type = "s"
        for position, column in enumerate(frame.columns, start=1):
            longest = max([len(str(column)), *(len(utils.cell_text(v)) for v in frame[column])])
            sheet.column_dimensions[get_column_letter(position)].width = min(longest + 2, MAX_COLUMN_WIDTH)

    data = buffer.getvalue()
    logger.info("Built Excel report with %d row(s), %d bytes", len(frame), len(data))
    return data
