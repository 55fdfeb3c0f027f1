"""Game logic for a Pengo-style ice-block pushing arcade game, with no rendering attached."""

__version__ = "0.1.0"