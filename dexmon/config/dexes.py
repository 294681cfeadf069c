"""
DEX registry.

Static metadata for the pool factories the monitor knows about: display name,
home page and swap URL template. Pollers only know a source by name; the
registry turns that name into something a human can click.
"""

from dataclasses import dataclass

# Factory addresses on Hyperliquid EVM
PRJX_FACTORY_ADDRESS = "0xFf7B3e8C00e57ea31477c32A5B52a58Eea47b072"
HYPERSWAP_FACTORY_ADDRESS = "0xB1c0fa0B789320044A6F623cFe5eBda9562602E3"


@dataclass(frozen=True, slots=True)
class DexMeta:
    """Display metadata of a single DEX."""

    name: str
    display_name: str
    url: str = ""
    trade_url_template: str = ""

    def trade_url(self, token_a: str, token_b: str) -> str:
        """
        Build swap URL for a token pair.

        Args:
            token_a: Input token address
            token_b: Output token address

        Returns:
            Swap URL, or empty string if the DEX has no template
        """
        if not self.trade_url_template:
            return ""
        return self.trade_url_template.format(token_a=token_a, token_b=token_b)


DEFAULT_DEXES: tuple[dict[str, str], ...] = (
    {
        "name": "prjx",
        "factory_address": PRJX_FACTORY_ADDRESS,
        "display_name": "Prjx",
        "url": "https://prjx.com",
        "trade_url_template": (
            "https://prjx.com/swap?inputCurrency={token_a}&outputCurrency={token_b}"
        ),
    },
    {
        "name": "hyperswap",
        "factory_address": HYPERSWAP_FACTORY_ADDRESS,
        "display_name": "Hyperswap",
        "url": "https://hyperswap.com",
        "trade_url_template": (
            "https://app.hyperswap.exchange/#/swap"
            "?inputCurrency={token_a}&outputCurrency={token_b}"
        ),
    },
)


class DexRegistry:
    """Lookup of DEX metadata by source name."""

    def __init__(self, dexes: list[DexMeta] | None = None) -> None:
        self._dexes: dict[str, DexMeta] = {}
        for dex in dexes or []:
            self._dexes[dex.name] = dex

    @classmethod
    def from_sources(cls, sources) -> "DexRegistry":
        """Build registry from configured sources (SourceSettings)."""
        return cls([
            DexMeta(
                name=source.name,
                display_name=source.display_name or source.name,
                url=source.url,
                trade_url_template=source.trade_url_template,
            )
            for source in sources
        ])

    def get(self, name: str) -> DexMeta:
        """Return metadata for a source, or a bare entry for unknown names."""
        dex = self._dexes.get(name)
        if dex is None:
            return DexMeta(name=name, display_name=name)
        return dex

    def __contains__(self, name: object) -> bool:
        return name in self._dexes

    def __len__(self) -> int:
        return len(self._dexes)
