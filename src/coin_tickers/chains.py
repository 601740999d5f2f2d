"""Wallet chains and their CoinGecko platform names."""
from enum import IntEnum


class Chain(IntEnum):
    """Chains known to the wallet, keyed by EVM chain id.

    Any chain id not listed here is a custom network.
    """

    MAIN = 1
    CLASSIC = 61
    POA = 99
    KOVAN = 42
    ROPSTEN = 3
    RINKEBY = 4
    SOKOL = 77
    CALLISTO = 820
    XDAI = 100
    GOERLI = 5
    ARTIS_SIGMA1 = 246529
    ARTIS_TAU1 = 246785
    BINANCE_SMART_CHAIN = 56
    BINANCE_SMART_CHAIN_TESTNET = 97
    HECO = 128
    HECO_TESTNET = 256
    FANTOM = 250
    FANTOM_TESTNET = 4002
    AVALANCHE = 43114
    AVALANCHE_TESTNET = 43113
    POLYGON = 137
    MUMBAI_TESTNET = 80001


# Keys of the CoinGecko `platforms` object, as returned by /coins/list.
_PLATFORMS: dict[Chain, str | None] = {
    Chain.MAIN: "ethereum",
    Chain.CLASSIC: "ethereum-classic",
    Chain.POA: None,
    Chain.KOVAN: None,
    Chain.ROPSTEN: None,
    Chain.RINKEBY: None,
    Chain.SOKOL: None,
    Chain.CALLISTO: None,
    Chain.XDAI: "xdai",
    Chain.GOERLI: None,
    Chain.ARTIS_SIGMA1: None,
    Chain.ARTIS_TAU1: None,
    Chain.BINANCE_SMART_CHAIN: "binance-smart-chain",
    Chain.BINANCE_SMART_CHAIN_TESTNET: None,
    Chain.HECO: None,
    Chain.HECO_TESTNET: None,
    Chain.FANTOM: None,
    Chain.FANTOM_TESTNET: None,
    Chain.AVALANCHE: "Avalanche",
    Chain.AVALANCHE_TESTNET: None,
    Chain.POLYGON: "polygon-pos",
    Chain.MUMBAI_TESTNET: None,
}


def platform_for_chain(chain_id: int) -> str | None:
    """Return the CoinGecko platform name for a chain id, or None if unsupported."""
    try:
        chain = Chain(chain_id)
    except ValueError:
        return None
    return _PLATFORMS[chain]
