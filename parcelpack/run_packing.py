"""
Simple CLI script to split an order into parcels end-to-end.
"""

from __future__ import annotations

import argparse
import json
import logging
import sys
from pathlib import Path
from typing import List, Sequence

from parcelpack.core.errors import PackingError
from parcelpack.core.parcel_selector import ORDER_RESERVATION, TEMPLATE_RESERVATION
from parcelpack.core.splitter import ShipmentPlan, catalog_for_carrier, split_order
from parcelpack.models.line_item import OrderLineItem
from parcelpack.models.parcel import ParcelTemplate
from parcelpack.report.pdf_generator import generate_pdf_report
from parcelpack.visualization import layout_plot

CONFIG_DIR = Path(__file__).resolve().parent / "config"


def load_config(path: Path) -> dict:
    with open(path, "r", encoding="utf-8") as file:
        return json.load(file)


def load_catalog(path: Path, carrier: str | None = None) -> List[ParcelTemplate]:
    catalog = [ParcelTemplate.from_dict(entry) for entry in load_config(path)["parcels"]]
    if carrier:
        catalog = catalog_for_carrier(catalog, carrier)
    return catalog


def load_order(path: Path) -> List[OrderLineItem]:
    return [OrderLineItem.from_dict(entry) for entry in load_config(path)["items"]]


def write_artifacts(output_dir: Path, line_items: Sequence[OrderLineItem], plan: ShipmentPlan, images: bool) -> Path:
    output_dir.mkdir(parents=True, exist_ok=True)
    image_paths: List[Path] = []
    if images:
        for index, parcel in enumerate(plan.parcels, start=1):
            image_path = output_dir / f"parcel_{index}_layout.png"
            layout_plot.save_figure_image(layout_plot.parcel_layout_figure(parcel), image_path)
            image_paths.append(image_path)

    (output_dir / "shipment.json").write_text(json.dumps(plan.to_dict(), indent=2), encoding="utf-8")
    return generate_pdf_report(output_dir / "packing_list.pdf", line_items, plan, image_paths)


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description="Split an order into shipping parcels")
    parser.add_argument("--catalog", type=Path, default=CONFIG_DIR / "parcels.json", help="Parcel catalog JSON")
    parser.add_argument("--order", type=Path, default=CONFIG_DIR / "order.json", help="Order JSON")
    parser.add_argument("--carrier", default="USPS", help="Carrier whose templates are used (default: USPS)")
    parser.add_argument(
        "--reservation",
        type=float,
        default=ORDER_RESERVATION,
        help=f"Share of parcel volume kept for packing material (default: {ORDER_RESERVATION})",
    )
    parser.add_argument(
        "--template-reservation",
        type=float,
        default=TEMPLATE_RESERVATION,
        help=f"Share of parcel extents kept while placing units (default: {TEMPLATE_RESERVATION})",
    )
    parser.add_argument("--output", type=Path, default=None, help="Directory for the PDF packing list")
    parser.add_argument("--images", action="store_true", help="Render parcel layouts into the PDF")
    parser.add_argument("-v", "--verbose", action="store_true", help="Log every packing decision")
    return parser


def main(argv: Sequence[str] | None = None) -> int:
    args = build_parser().parse_args(argv)
    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )

    line_items = load_order(args.order)
    catalog = load_catalog(args.catalog, args.carrier)
    try:
        plan = split_order(
            line_items,
            catalog,
            reservation=args.reservation,
            template_reservation=args.template_reservation,
        )
    except PackingError as exc:
        print(f"Order cannot be packed: {exc}", file=sys.stderr)
        return 1

    print("=== Parcel Split Summary ===")
    print(f"Parcels: {len(plan.parcels)}")
    for index, parcel in enumerate(plan.parcels, start=1):
        items = ", ".join(f"{item_id} x{quantity}" for item_id, quantity in parcel.item_quantities().items())
        print(f"  {index}. {parcel.name} [{parcel.template_id}] {parcel.weight_label()} lb: {items}")
    print(f"Total weight: {plan.total_weight:.2f} lb")

    if args.output is not None:
        pdf_path = write_artifacts(args.output, line_items, plan, args.images)
        print(f"Artifacts saved to: {pdf_path.parent}")
    return 0


if __name__ == "__main__":
    sys.exit(main())
