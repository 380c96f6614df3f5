"""Entry point for ledger reconstruction"""
import argparse
import json
import logging
import sys
import traceback
from typing import List, Optional

from tron_ledger.config import settings
from tron_ledger.ledger import LedgerBuilder
from tron_ledger.services.export import write_ledger

logging.basicConfig(level=logging.INFO, format='%(message)s')
logger = logging.getLogger(__name__)

def parse_args(argv: Optional[List[str]] = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(description='Reconstruct the transfer ledger of a TRON account')
    parser.add_argument('address', help='TRON address (base58)')
    parser.add_argument('output', nargs='?', default=settings.OUTPUT_FILE,
                        help=f'CSV file to write (default: {settings.OUTPUT_FILE})')
    return parser.parse_args(argv)

def run(argv: Optional[List[str]] = None) -> None:
    """Build the ledger for one address and write it out."""
    args = parse_args(argv)
    try:
        # Log config (excluding sensitive data)
        safe_config = settings.model_dump(exclude={'TRONGRID_API_KEY'})
        logger.info("Using configuration:")
        logger.info(json.dumps(safe_config, indent=2))

        logger.info(f"Writing to file {args.output}...")
        builder = LedgerBuilder.from_settings(settings)
        ledger = builder.build(args.address)
        write_ledger(ledger, args.output)

    except Exception as e:
        logger.error(f"Error during ledger reconstruction: {e}")
        traceback.print_exc()
        sys.exit(1)

if __name__ == "__main__":
    run()
