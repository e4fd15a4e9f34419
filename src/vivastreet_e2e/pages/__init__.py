"""
Page objects for the Vivastreet site.

Every page implements the `SitePage` capability contract (navigate,
wait_until_ready, handle_cookie_consent, handle_adult_disclaimer) and runs
each public action as a named step.
"""

from .ad_details import AdDetailsPage
from .base import SitePage
from .consent import ConsentOutcome, ConsentReport, handle_adult_disclaimer, handle_cookie_consent
from .home import HomePage
from .login import LoginPage
from .search_results import SearchResultsPage

__all__ = [
    'AdDetailsPage',
    'SitePage',
    'ConsentOutcome',
    'ConsentReport',
    'handle_adult_disclaimer',
    'handle_cookie_consent',
    'HomePage',
    'LoginPage',
    'SearchResultsPage',
]
