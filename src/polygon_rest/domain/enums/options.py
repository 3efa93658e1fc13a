# src/polygon_rest/domain/enums/options.py
# Copyright (c)
# SPDX-License-Identifier: MIT
"""Options contract kind enumeration.

Layer:
    domain
"""

from __future__ import annotations

from enum import Enum


class ContractKind(str, Enum):
    """Call or put.

    Values match the ``contract_type`` literals used by the upstream API; the
    single-letter OCC code is exposed through :attr:`occ_code`.
    """

    CALL = "call"
    PUT = "put"

    @property
    def occ_code(self) -> str:
        """Return the OCC type letter (``"C"`` or ``"P"``)."""
        return "C" if self is ContractKind.CALL else "P"

    @classmethod
    def from_occ_code(cls, code: str) -> ContractKind:
        """Resolve an OCC type letter.

        Args:
            code: ``"C"`` or ``"P"``.

        Returns:
            ContractKind: The matching member.

        Raises:
            ValueError: If ``code`` is not a valid OCC type letter.
        """
        if code == "C":
            return cls.CALL
        if code == "P":
            return cls.PUT
        raise ValueError(f"invalid OCC contract type: {code!r}")
