"""
Main Application Entry Point

Provides CLI interface for the RFP Bid Agent.
"""

import argparse
import sys
from pathlib import Path

from rfp_bid_agent.catalog import get_products_by_category, load_catalog, search_products
from rfp_bid_agent.config import Config
from rfp_bid_agent.logging_config import setup_logging
from rfp_bid_agent.orchestrator import OrchestratorAgent
from rfp_bid_agent.pricing import PricingAgent
from rfp_bid_agent.rfp_processor import RFPProcessor
from rfp_bid_agent.sales_agent import SalesAgent
from rfp_bid_agent.synonyms import load_synonym_table
from rfp_bid_agent.technical_agent import TechnicalAgent


def _build_technical_agent(config, top_n=None):
    catalog = load_catalog(config.catalog_path or None)
    synonyms = load_synonym_table(config.synonyms_path) if config.synonyms_path else None
    return TechnicalAgent(
        catalog=catalog,
        top_n=top_n if top_n is not None else config.top_n,
        synonyms=synonyms,
        max_workers=config.max_workers,
    )


def match_specs(args, config):
    """Match product requirements from a JSON file against the catalog."""
    agent = _build_technical_agent(config, args.top_n)

    processor = RFPProcessor()
    print(f"Loading requirements from: {args.specs_json}")
    product_specs = processor.load_product_specs(args.specs_json)
    print(f"Loaded {len(product_specs)} products, catalog has {len(agent.catalog)} SKUs")

    technical_matches = agent.find_matches(product_specs)

    for top in technical_matches:
        print(f"\n{top.product_name}")
        if not top.top_matches:
            print("  No matching products found in OEM catalog.")
            continue
        for rank, result in enumerate(top.top_matches, 1):
            print(
                f"  {rank}. {result.sku:<22} {result.spec_match_percentage:>3}% "
                f"({result.matching_params}/{result.total_params}) {result.product_name}"
            )
        best = top.top_matches[0]
        for row in best.comparison_table:
            mark = "✓" if row.matches else "✗"
            print(f"     {mark} {row.parameter}: {row.rfp_value} | {row.oem_value}")

    if args.output:
        processor.save_matches(technical_matches, args.output)
        print(f"\n✓ Comparison saved to: {args.output}")


def process_rfp(args, config):
    """Run the full sales -> technical -> pricing workflow on an RFP text file."""
    config.validate()

    rfp_text = Path(args.rfp_file).read_text(encoding="utf-8")
    valid, errors = OrchestratorAgent.validate_rfp_input(rfp_text)
    if not valid:
        raise ValueError("; ".join(errors))

    print("Initializing RFP Bid Agent...")
    print(f"  Model: {config.model_name}")

    technical_agent = _build_technical_agent(config)
    orchestrator = OrchestratorAgent(
        sales_agent=SalesAgent(api_key=config.google_api_key, model_name=config.model_name),
        technical_agent=technical_agent,
        pricing_agent=PricingAgent(technical_agent.catalog),
    )

    def on_progress(progress):
        print(f"  [{progress.step}] {progress.message}")

    response = orchestrator.process_rfp(rfp_text, on_progress=on_progress)
    print(f"\nTotal bid value: {response.total_bid_value:,.2f}")

    output_path = args.output or str(Path(args.rfp_file).with_suffix("")) + "_bid.json"
    RFPProcessor().save_response(response, output_path)
    print(f"\n✓ Bid saved to: {output_path}")


def list_catalog(args, config):
    """List catalog SKUs, optionally filtered."""
    catalog = load_catalog(config.catalog_path or None)

    if args.category:
        catalog = get_products_by_category(args.category, catalog)
    if args.search:
        catalog = search_products(args.search, catalog)

    for product in catalog:
        print(f"{product.sku:<22} {product.category:<16} {product.product_name}")
    print(f"\n{len(catalog)} products")


def main(argv=None):
    """Main CLI entry point."""
    parser = argparse.ArgumentParser(
        description="RFP Bid Agent - spec matching and bid drafting for equipment RFPs"
    )
    parser.add_argument("--log-file", help="Also write logs to this file")

    subparsers = parser.add_subparsers(dest="command", help="Command to run")

    match_parser = subparsers.add_parser("match", help="Match product specs against the catalog")
    match_parser.add_argument("specs_json", help="JSON file with product specifications")
    match_parser.add_argument("--top-n", "-n", type=int, help="Candidates per product")
    match_parser.add_argument("--output", "-o", help="CSV file for the comparison tables")

    process_parser = subparsers.add_parser("process", help="Draft a priced bid for an RFP")
    process_parser.add_argument("rfp_file", help="Text file with the RFP document")
    process_parser.add_argument("--output", "-o", help="Output JSON path")

    catalog_parser = subparsers.add_parser("catalog", help="List catalog products")
    catalog_parser.add_argument("--category", help="Only this category")
    catalog_parser.add_argument("--search", help="Filter by name or SKU")

    args = parser.parse_args(argv)

    if not args.command:
        parser.print_help()
        sys.exit(1)

    try:
        config = Config()
        setup_logging(config.log_level, args.log_file)

        if args.command == "match":
            match_specs(args, config)
        elif args.command == "process":
            process_rfp(args, config)
        elif args.command == "catalog":
            list_catalog(args, config)
    except Exception as e:
        print(f"\n✗ Error: {e}", file=sys.stderr)
        sys.exit(1)


if __name__ == "__main__":
    main()
