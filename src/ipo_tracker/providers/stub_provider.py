"""Stub IPO and GMP sources for offline/testing use."""

from ipo_tracker.domain.models import ExchangePlatform, GmpStatus
from ipo_tracker.providers.ipo_source import IpoLink, RawGmp, RawIpoDetails, ScrapedAllocation


# Deterministic sample IPOs per platform
_STUB_IPOS: dict[ExchangePlatform, list[tuple[str, RawIpoDetails]]] = {
    ExchangePlatform.MAINBOARD: [
        (
            "Sample Infra Projects",
            RawIpoDetails(
                url="https://example.invalid/ipo/sample-infra-projects-ipo/1/",
                issue_size="₹1,200.00 Cr",
                price_range="₹90 to ₹95",
                open_date="Jul 25, 2025",
                close_date="Jul 29, 2025",
                lot_size="157",
                listing_date="Aug 1, 2025",
                allotment_date="Jul 30, 2025",
                refund_date="Jul 31, 2025",
                credit_date="Jul 31, 2025",
                gmp_url="https://example.invalid/chr-gmp/sample-infra-projects/1/",
                allocation=ScrapedAllocation(
                    qib_shares="63,15,789 (50.00%)",
                    nii_shares="18,94,737 (15.00%)",
                    retail_shares="44,21,053 (35.00%)",
                ),
            ),
        ),
    ],
    ExchangePlatform.SME: [
        (
            "Sellowrap Industries",
            RawIpoDetails(
                url="https://example.invalid/ipo/sellowrap-industries-ipo/2040/",
                issue_size="₹30.28 Cr",
                price_range="₹90 - ₹95",
                open_date="Jul 25, 2025",
                close_date="Jul 29, 2025",
                lot_size="1600",
                allocation=ScrapedAllocation(
                    nii_shares="5,23,200 (20.02%)",
                    retail_shares="12,20,800 (46.71%)",
                ),
            ),
        ),
    ],
}


class StubIpoSource:
    """
    IpoSource with fixed sample data for offline operation.

    Every listed IPO is announced active.
    """

    def list_ipo_links(self, platform: ExchangePlatform) -> list[IpoLink]:
        return [
            IpoLink(name=name, url=details.url, announced_active=True)
            for name, details in _STUB_IPOS[platform]
        ]

    def fetch_details(self, link: IpoLink) -> RawIpoDetails:
        for entries in _STUB_IPOS.values():
            for name, details in entries:
                if name == link.name:
                    return details
        return RawIpoDetails()


class StubGmpSource:
    """GmpSource returning a fixed live premium."""

    def fetch_gmp(self, gmp_url: str) -> RawGmp:
        return RawGmp(status=GmpStatus.LIVE, value="₹105 (10.53%)", raw="₹10")
