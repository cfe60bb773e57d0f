"""riftimpact - time-weighted combat impact analysis for League of Legends matches."""

__version__ = "0.1.0"
