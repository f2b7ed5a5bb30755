from dataclasses import dataclass
import os
from dotenv import load_dotenv

from swapboard.core.errors import UnsupportedNetwork

load_dotenv()


def _int_env(name: str, default: int) -> int:
    raw = os.environ.get(name)
    if raw is None or raw.strip() == "":
        return default
    try:
        return int(raw)
    except ValueError as e:
        raise ValueError(f"Invalid {name} value: {raw!r}") from e


# ---- The Graph / Uniswap v3 subgraph ----
GRAPH_API_KEY = os.environ.get("GRAPH_API_KEY", "")
SUBGRAPH_URL_OVERRIDE = os.environ.get("UNISWAP_SUBGRAPH_URL")
SUBGRAPH_GATEWAY_URL = "https://gateway.thegraph.com/api/{api_key}/subgraphs/id/{subgraph_id}"
SUBGRAPH_TIMEOUT_SEC = _int_env("SUBGRAPH_TIMEOUT_SEC", 15)

# ---- Retrieval ----
TARGET_SWAPS = _int_env("TARGET_SWAPS", 2000)
BATCH_SIZE = _int_env("BATCH_SIZE", 1000)

# ---- Leaderboard ----
DEFAULT_LIMIT = _int_env("DEFAULT_LIMIT", 20)
DEFAULT_NETWORK = os.environ.get("DEFAULT_NETWORK", "ethereum")


# ----- Networks ------

@dataclass(frozen=True)
class NetworkConfig:
    name: str
    subgraph_id: str
    default_start_block_offset: int     # ~30 days of blocks


NETWORKS = {
    "ethereum": NetworkConfig("Ethereum", "5zvR82QoaXYFyDEKLZ9t6v9adgnptxYpKpSbxtgVENFV", 216_000),
    "arbitrum": NetworkConfig("Arbitrum One", "FbCGRftH4a3yZugY7TnbYgPJVEv2LvMT6oF1fxPe9aJM", 2_160_000),
    "polygon": NetworkConfig("Polygon", "3hCPRGf4z88VC5rsBKU5AA9FBBq5nF3jbKJG7VZCbhjm", 1_296_000),
    "optimism": NetworkConfig("Optimism", "Cghf4LfVqPiFw6fp6Y5X5Ubc8UpmUhSfJL82zwiBFLaj", 432_000),
    "base": NetworkConfig("Base", "43Hwfi3dJSoGpyas9VkK2E9DiKpweh7jijkRBhWGwHJK", 432_000),
}
NETWORK_ALIASES = {"mainnet": "ethereum"}


def get_network(network: str) -> NetworkConfig:
    key = network.strip().lower()
    key = NETWORK_ALIASES.get(key, key)
    if key not in NETWORKS:
        raise UnsupportedNetwork(
            f"Unsupported network: {network}. Supported networks: {', '.join(NETWORKS)}"
        )
    return NETWORKS[key]


def subgraph_url_for(network: str) -> str:
    cfg = get_network(network)
    if SUBGRAPH_URL_OVERRIDE:
        return SUBGRAPH_URL_OVERRIDE
    return SUBGRAPH_GATEWAY_URL.format(api_key=GRAPH_API_KEY, subgraph_id=cfg.subgraph_id)
