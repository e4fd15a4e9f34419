"""
Journeys against the real Vivastreet site.

Every journey starts on the homepage with the cookie banner dismissed
(`site_page` fixture) and is skipped unless UI_LIVE_TESTS=1.

Journeys:
    test_ad_search - category/location search, result details, no-results
                     search, search API parameter checks
    test_account   - login rejection with invalid credentials
"""
