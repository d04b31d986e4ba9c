"""Derivation of Big-NII / Small-NII quotas and maximum-allottee counts."""

import logging
from fractions import Fraction
from math import floor
from typing import Optional, Union

from ipo_tracker.core.numbers import parse_indian_int
from ipo_tracker.domain.models import AllocationSplit
from ipo_tracker.providers.ipo_source import ScrapedAllocation

logger = logging.getLogger(__name__)

ShareCount = Union[str, int, None]


class AllocationDeriver:
    """
    Splits a total NII (HNI) quota into B-NII and S-NII sub-quotas.

    Only used as a fallback: when a page already lists the B-NII/S-NII
    split, those figures win and nothing is derived.
    """

    def __init__(self, big_share_ratio: float = 2 / 3):
        if not 0 < big_share_ratio < 1:
            raise ValueError("big_share_ratio must be between 0 and 1")
        self._big_ratio = Fraction(big_share_ratio).limit_denominator(10_000)

    def split_nii(self, nii_total: int) -> tuple[int, int]:
        """
        Return (b_nii, s_nii) for a total NII quota.

        s_nii is the remainder so the two parts always sum to the total.
        """
        if nii_total < 0:
            raise ValueError("nii_total must be non-negative")
        b_nii = floor(nii_total * self._big_ratio + Fraction(1, 2))
        return b_nii, nii_total - b_nii

    @staticmethod
    def max_allottees(shares: Optional[int], min_shares: Optional[int]) -> Optional[int]:
        """floor(shares / min_shares), or None when either side is missing or the divisor is not positive."""
        if shares is None or min_shares is None or min_shares <= 0:
            return None
        return shares // min_shares

    def derive(
        self,
        nii_shares: ShareCount,
        s_hni_min_shares: Optional[int],
        retail_shares: ShareCount = None,
        retail_min_shares: Optional[int] = None,
        qib_shares: ShareCount = None,
    ) -> Optional[AllocationSplit]:
        """
        Compute the allocation block from the total NII quota.

        Returns None (whole block unknown) when the NII figure cannot be parsed;
        it is never defaulted to zero.
        """
        nii_total = parse_indian_int(nii_shares)
        if nii_total is None:
            logger.debug("NII shares not parseable: %r", nii_shares)
            return None

        b_nii, s_nii = self.split_nii(nii_total)
        retail_total = parse_indian_int(retail_shares)
        return AllocationSplit(
            nii_shares=nii_total,
            b_nii=b_nii,
            s_nii=s_nii,
            qib_shares=parse_indian_int(qib_shares),
            retail_shares=retail_total,
            max_b_nii_allottees=self.max_allottees(b_nii, s_hni_min_shares),
            max_s_nii_allottees=self.max_allottees(s_nii, s_hni_min_shares),
            max_retail_allottees=self.max_allottees(retail_total, retail_min_shares),
            derived=True,
        )

    def resolve(
        self,
        scraped: ScrapedAllocation,
        s_hni_min_shares: Optional[int],
        retail_min_shares: Optional[int],
    ) -> Optional[AllocationSplit]:
        """Prefer the page's own split; fall back to derive() from the NII total."""
        if scraped.has_direct_split:
            return AllocationSplit(
                nii_shares=parse_indian_int(scraped.nii_shares),
                b_nii=parse_indian_int(scraped.b_nii_shares),
                s_nii=parse_indian_int(scraped.s_nii_shares),
                qib_shares=parse_indian_int(scraped.qib_shares),
                retail_shares=parse_indian_int(scraped.retail_shares),
                max_b_nii_allottees=parse_indian_int(scraped.max_b_nii_allottees),
                max_s_nii_allottees=parse_indian_int(scraped.max_s_nii_allottees),
                max_retail_allottees=parse_indian_int(scraped.max_retail_allottees),
                derived=False,
            )
        return self.derive(
            scraped.nii_shares,
            s_hni_min_shares,
            retail_shares=scraped.retail_shares,
            retail_min_shares=retail_min_shares,
            qib_shares=scraped.qib_shares,
        )
