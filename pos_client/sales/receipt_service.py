"""
Receipt hand-off for completed sales.

The backend renders receipts as preformatted text sized for 80mm thermal
paper. The client fetches that text and hands it to a printer: any callable
taking the text. Layout of the receipt is not the client's concern.
"""

import logging
import sys
from typing import Callable, Optional, TextIO

from .api import SalesApi

logger = logging.getLogger(__name__)

ReceiptPrinter = Callable[[str], None]


class StreamReceiptPrinter:
    """
    Printer writing receipts to a text stream.

    Point it at stdout, a file, or a character device exposed by a thermal
    printer driver.
    """

    def __init__(self, stream: Optional[TextIO] = None):
        self.stream = stream or sys.stdout

    def __call__(self, receipt_text: str) -> None:
        self.stream.write(receipt_text)
        if not receipt_text.endswith("\n"):
            self.stream.write("\n")
        self.stream.flush()


def print_sale_receipt(sales_api: SalesApi, sale_id: str, printer: ReceiptPrinter) -> str:
    """
    Fetch the printable receipt for a sale and hand it to the printer.

    Returns:
        The receipt text that was printed

    Raises:
        ApiError: If the receipt could not be fetched (nothing is printed)
    """
    receipt_text = sales_api.get_print_receipt(sale_id)
    printer(receipt_text)
    logger.info(f"Receipt for sale {sale_id} sent to printer")
    return receipt_text
