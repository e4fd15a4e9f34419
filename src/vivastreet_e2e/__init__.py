"""End-to-end test harness for the Vivastreet classifieds site."""

__version__ = "1.0.0"
