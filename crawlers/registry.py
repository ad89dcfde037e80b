"""
Registry of crawlable sites.
"""

from typing import Dict, List

from listingscraper.scraper import Site

from crawlers.airbnb import AIRBNB_SITE
from crawlers.shajgoj import SHAJGOJ_SITE, SHAJGOJ_SKIN_SITE

SITES: Dict[str, Site] = {site.name: site for site in (SHAJGOJ_SITE, SHAJGOJ_SKIN_SITE, AIRBNB_SITE)}


def site_names() -> List[str]:
    return sorted(SITES)


def get_site(name: str) -> Site:
    """
    Look up a site by name.

    Raises:
        KeyError: If no site is registered under ``name``
    """
    try:
        return SITES[name]
    except KeyError:
        raise KeyError(f"Unknown site '{name}'. Available: {', '.join(site_names())}") from None
