"""
GST Invoice Builder
Computes invoice totals and requests the rendered invoice document

Usage:
    python main.py invoice.json                          # Validate, preview and download
    python main.py invoice.json --preview                # Validate and preview only
    python main.py --items items.csv --loading-charge 10 # Totals for a CSV of line items
"""

import logging
import sys
from pathlib import Path
from typing import List, Optional

from agents.orchestrator import OrchestratorAgent
from agents.reporter import ReporterAgent
from calculator.totals import compute
from models.invoice import InvoiceRequest
from utils.config import load_config, get_data_path, get_output_dir
from utils.data_loaders import CompanyDirectory, LineItemLoader, load_invoice_request
from utils.exceptions import InvoiceValidationError
from utils.formatting import sanitize_filename
from utils.validators import InvoiceValidator, parse_number


USAGE = """
GST Invoice Builder - Usage

Single Invoice:
    python main.py <invoice.json>
    Example: python main.py data/sample_invoice.json

Preview only (no document request):
    python main.py <invoice.json> --preview

Totals for a line item sheet:
    python main.py --items items.csv [--loading-charge 10]

Buyer companies:
    python main.py --companies

Options:
    --config PATH   Configuration file (default: config.yaml)
    --help          Show this help message
"""

VALUE_OPTIONS = ('--config', '--items', '--loading-charge')


class InvoiceBuilder:
    """Main invoice builder application"""

    def __init__(self, config_path: str = "config.yaml"):
        # Load configuration
        self.config = load_config(config_path)
        self._configure_logging()

        self.orchestrator = None
        self.reporter = ReporterAgent(self.config, use_color=sys.stdout.isatty())

    def _configure_logging(self):
        level = str(self.config.get('logging', {}).get('level', 'INFO')).upper()
        logging.basicConfig(
            level=getattr(logging, level, logging.INFO),
            format="%(asctime)s %(levelname)s %(name)s: %(message)s"
        )

    def _get_orchestrator(self) -> OrchestratorAgent:
        if self.orchestrator is None:
            self.orchestrator = OrchestratorAgent(self.config)
        return self.orchestrator

    def build_invoice(self, invoice_path: str, preview_only: bool = False) -> int:
        """Validate, preview and (optionally) download one invoice"""

        print("\n🚀 GST Invoice Builder - Single Invoice Mode")
        print("=" * 80)

        try:
            payload = load_invoice_request(invoice_path)
        except (OSError, ValueError) as e:
            print(f"❌ Error: could not read {invoice_path}: {e}")
            return 1

        print(f"\n📄 Loading invoice: {invoice_path}")

        is_valid, errors = InvoiceValidator().validate_safe(payload)
        if not is_valid:
            print("\n❌ Please fix the following errors:\n")
            for error in errors:
                print(f"   • {error}")
            return 1

        request = InvoiceRequest.from_payload(payload)

        try:
            result = self._get_orchestrator().process_request(request, preview_only=preview_only)
        except InvoiceValidationError as e:
            print("\n❌ " + e.format_message())
            return 1

        print("\n" + self.reporter.generate_console_report(request, result['totals'], result['checks']))

        output_dir = get_output_dir(self.config)

        # Save JSON export
        json_file = output_dir / f"invoice_{sanitize_filename(request.bill_no) or 'invoice'}.json"
        json_file.write_text(self.reporter.generate_json_report(request, result['totals']), encoding="utf-8")
        print(f"\n💾 JSON saved: {json_file}")

        if result['status'] == 'transport_error':
            print(f"\n❌ {result['error']}")
            return 2

        document = result['document']
        if document is not None:
            document_file = output_dir / document.filename
            document_file.write_bytes(document.content)
            print(f"💾 Document saved: {document_file} ({document.size} bytes)")

        return 0

    def totals_for_items(self, items_path: str, loading_charge: float = 0.0) -> int:
        """Print totals for a CSV sheet of line items"""

        print("\n🧮 GST Invoice Builder - Totals Mode")
        print("=" * 80)

        try:
            items = LineItemLoader.from_csv(items_path)
        except (OSError, ValueError) as e:
            print(f"❌ Error: could not read {items_path}: {e}")
            return 1

        print(f"\n📦 {len(items)} line items from {items_path}")

        try:
            totals = compute(items, loading_charge)
        except InvoiceValidationError as e:
            print("\n❌ " + e.format_message())
            return 1

        print("\n" + self.reporter.generate_totals_report(totals))
        return 0

    def list_companies(self) -> int:
        """Print the buyer company directory"""

        companies_file = get_data_path(self.config['data'].get('companies', 'companies.yaml'), self.config)
        try:
            directory = CompanyDirectory(companies_file)
        except OSError as e:
            print(f"❌ Error: could not read {companies_file}: {e}")
            return 1

        print(f"\n🏢 {len(directory)} companies in {companies_file}")
        for key in directory.keys():
            print(f"   {key:15s} | {directory.get(key).name}")
        print("   other           | (enter buyer name and address manually)")
        return 0


def _option_value(args: List[str], name: str) -> Optional[str]:
    if name in args:
        index = args.index(name)
        if index + 1 < len(args):
            return args[index + 1]
    return None


def _positional_args(args: List[str]) -> List[str]:
    positional = []
    skip_next = False
    for arg in args:
        if skip_next:
            skip_next = False
        elif arg in VALUE_OPTIONS:
            skip_next = True
        elif not arg.startswith('--'):
            positional.append(arg)
    return positional


def main(argv: List[str] = None) -> int:
    """Main entry point"""

    args = list(sys.argv[1:] if argv is None else argv)

    if not args or '--help' in args:
        print(USAGE)
        return 0

    builder = InvoiceBuilder(_option_value(args, '--config') or "config.yaml")

    if '--companies' in args:
        return builder.list_companies()

    items_path = _option_value(args, '--items')
    if items_path:
        raw_charge = _option_value(args, '--loading-charge')
        loading_charge = parse_number(raw_charge) if raw_charge else 0.0
        if loading_charge is None:
            print(f"❌ Loading charge must be a valid number (0 or greater): {raw_charge}")
            return 1
        return builder.totals_for_items(items_path, loading_charge)

    positional = _positional_args(args)
    if not positional:
        print(USAGE)
        return 1

    invoice_path = positional[0]
    if not Path(invoice_path).exists():
        print(f"❌ Error: {invoice_path} not found")
        return 1

    return builder.build_invoice(invoice_path, preview_only='--preview' in args)


if __name__ == "__main__":
    sys.exit(main())
