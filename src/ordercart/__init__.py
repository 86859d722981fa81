"""ordercart — menu browsing, cart building, and guarded order submission."""

__version__ = "0.1.0"
