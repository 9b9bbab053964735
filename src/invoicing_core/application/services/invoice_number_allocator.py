from __future__ import annotations

from typing import TYPE_CHECKING

import structlog

from invoicing_core.domain.value_objects.invoice_number import (
    DEFAULT_PREFIX,
    DEFAULT_WIDTH,
    format_invoice_number,
    invoice_number_prefix,
    parse_sequence,
)

if TYPE_CHECKING:
    from invoicing_core.application.ports import InvoiceRepository, InvoiceSequence, TimeProvider

logger = structlog.get_logger(__name__)


class InvoiceNumberAllocator:
    """Allocates the next human-readable invoice number for the current year.

    Numbers have the form ``<prefix>-<year>-<sequence>`` with the sequence
    zero-padded to ``width`` digits (``INV-2025-0001``). Each year has its own
    sequence.

    Allocation goes through an atomic InvoiceSequence, so two concurrent
    sends can never receive the same number. The first allocation for a
    year seeds the sequence from the highest number already stored under
    that year's prefix (non-numeric suffixes count as 0), so existing data
    such as ``INV-2025-0001, INV-2025-0007`` continues at ``INV-2025-0008``.
    """

    def __init__(
        self,
        sequence: InvoiceSequence,
        time_provider: TimeProvider,
        prefix: str = DEFAULT_PREFIX,
        width: int = DEFAULT_WIDTH,
    ) -> None:
        self._sequence = sequence
        self._time_provider = time_provider
        self._prefix = prefix
        self._width = width

    def generate(self, invoices: InvoiceRepository) -> str:
        """Return the next invoice number for the current year.

        Args:
            invoices: Read view used to seed the year's sequence on first use.
        """
        year_prefix = invoice_number_prefix(self._time_provider.today().year, self._prefix)

        def highest_existing() -> int:
            numbers = invoices.find_numbers_with_prefix(year_prefix)
            return max((parse_sequence(n, year_prefix) for n in numbers), default=0)

        sequence = self._sequence.next_value(year_prefix, highest_existing)
        invoice_number = format_invoice_number(year_prefix, sequence, self._width)

        logger.debug("Allocated invoice number", invoice_number=invoice_number)
        return invoice_number
