"""HOA Scout: HOA profile search, reports and on-demand enrichment."""

__version__ = "0.1.0"
