"""
ListingScraper - Paginated, polite web extraction for e-commerce and listing sites.

This package provides the reusable crawl loop (policy guard, fetchers,
extractor contract, pagination driver and sinks) that the site packages
under ``crawlers/`` plug into.
"""

__version__ = "0.1.0"
__author__ = "ListingScraper Team"
