"""
Packing-list PDF generator using ReportLab.
"""

from __future__ import annotations

from pathlib import Path
from typing import Iterable, Sequence

from reportlab.lib import colors
from reportlab.lib.pagesizes import A4, landscape
from reportlab.lib.styles import ParagraphStyle, getSampleStyleSheet
from reportlab.lib.units import mm
from reportlab.platypus import (
    Image,
    Paragraph,
    SimpleDocTemplate,
    Spacer,
    Table,
    TableStyle,
)

from parcelpack.core.splitter import ShipmentPlan
from parcelpack.models.line_item import OrderLineItem
from parcelpack.models.parcel import PackedParcel


def _build_table(data: Sequence[Sequence[str]], column_widths: Sequence[float]) -> Table:
    table = Table(data, colWidths=column_widths)
    table.setStyle(
        TableStyle(
            [
                ("BACKGROUND", (0, 0), (-1, 0), colors.HexColor("#F1F1F1")),
                ("TEXTCOLOR", (0, 0), (-1, 0), colors.HexColor("#333333")),
                ("ALIGN", (0, 0), (-1, -1), "LEFT"),
                ("FONTNAME", (0, 0), (-1, 0), "Helvetica-Bold"),
                ("FONTSIZE", (0, 0), (-1, -1), 10),
                ("BOTTOMPADDING", (0, 0), (-1, 0), 6),
                ("GRID", (0, 0), (-1, -1), 0.25, colors.HexColor("#DDDDDD")),
            ]
        )
    )
    return table


def _order_table(line_items: Sequence[OrderLineItem]) -> Table:
    headers = ["Item", "Name", "Quantity", "Dimensions", "Unit Weight"]
    rows = []
    for item in line_items:
        dims = item.dimensions
        rows.append(
            [
                item.item_id,
                item.name,
                str(item.quantity),
                f"{dims.length} x {dims.width} x {dims.height} {dims.distance_unit}",
                f"{dims.weight} {dims.mass_unit}",
            ]
        )
    return _build_table([headers] + rows, column_widths=[35 * mm, 70 * mm, 25 * mm, 60 * mm, 40 * mm])


def _parcel_table(parcel: PackedParcel) -> Table:
    dims = parcel.template.dimensions
    rows = [
        ("Carrier", parcel.carrier),
        ("Template", f"{parcel.name} ({parcel.template_id})"),
        ("Dimensions", f"{dims.length} x {dims.width} x {dims.height} {dims.distance_unit}"),
        ("Total Weight (lb)", parcel.weight_label()),
        ("Volume Utilisation (%)", f"{parcel.volume_utilisation_pct():.2f}"),
    ]
    for summary in parcel.items.values():
        rows.append((f"{summary.name} ({summary.item_id})", str(summary.quantity)))
    data = [["Field", "Value"]] + [[left, right] for left, right in rows]
    return _build_table(data, column_widths=[80 * mm, 100 * mm])


def generate_pdf_report(
    output_path: str | Path,
    line_items: Sequence[OrderLineItem],
    plan: ShipmentPlan,
    layout_images: Iterable[str | Path] = (),
) -> Path:
    """
    Generate a packing-list PDF for a shipment plan and return the output path.
    """
    output_path = Path(output_path)
    output_path.parent.mkdir(parents=True, exist_ok=True)

    doc = SimpleDocTemplate(
        str(output_path),
        pagesize=landscape(A4),
        leftMargin=20 * mm,
        rightMargin=20 * mm,
        topMargin=15 * mm,
        bottomMargin=15 * mm,
        title="Packing List",
    )

    styles = getSampleStyleSheet()
    title_style = styles["Title"]
    subtitle_style = ParagraphStyle(
        "Subtitle",
        parent=styles["Heading2"],
        textColor=colors.HexColor("#2D5B88"),
    )

    story: list = [
        Paragraph("Packing List", title_style),
        Spacer(1, 8 * mm),
        Paragraph("Order", subtitle_style),
        Spacer(1, 4 * mm),
        _order_table(line_items),
    ]

    for index, parcel in enumerate(plan.parcels, start=1):
        story.extend(
            [
                Spacer(1, 6 * mm),
                Paragraph(f"Parcel {index} of {len(plan.parcels)}", subtitle_style),
                Spacer(1, 4 * mm),
                _parcel_table(parcel),
            ]
        )

    for image_path in layout_images:
        image_path = Path(image_path)
        if image_path.exists():
            story.extend(
                [
                    Spacer(1, 6 * mm),
                    Paragraph(image_path.stem.replace("_", " ").title(), subtitle_style),
                    Spacer(1, 4 * mm),
                    Image(str(image_path), width=180 * mm, height=110 * mm),
                ]
            )

    doc.build(story)
    return output_path
