"""Mock Vivastreet site for local E2E testing.

Serves just enough of the real site for the page objects and the search API
helpers to run without network access:

- /                          homepage with the category / location search form,
                             a OneTrust-style cookie banner and the adult
                             content disclaimer
- /ajax/regions_tree.php     search endpoint; echoes the query it received

The homepage issues the search request from JavaScript exactly like the real
site does (fetch with X-Requested-With), so Playwright interception sees a
genuine browser request.

The site keeps its own category / location tables, independent of the
harness mappings, the way the real backend does.
"""
from __future__ import annotations

from typing import Any, Dict, List, Optional, Tuple

from flask import Flask, jsonify, render_template_string, request

# label, cat_id, meta_code
SITE_CATEGORIES: List[Tuple[str, int, str]] = [
    ("Home Appliances", 93, "appliances_furniture"),
    ("Escorts and Massages", 88, "adult_services"),
    ("Cars", 2, "motors"),  # listed on the site, not in the harness mappings
]

# label, geo_id
SITE_LOCATIONS: List[Tuple[str, int]] = [
    ("London", 7),
    ("Manchester", 15),
]

ADULT_META_CODES = {"adult_services"}

SEARCH_PATH = "/ajax/regions_tree.php"

# Mutable state, reset between tests
MOCK_STATE: Dict[str, Any] = {}


def reset_mock_state() -> None:
    MOCK_STATE.clear()
    MOCK_STATE.update(
        {
            # HTTP status returned by the search endpoint
            "search_status": 200,
            # When set, the homepage sends this geo_id whatever location is selected
            "geo_id_override": None,
            "show_cookie_banner": True,
            "requests": [],
        }
    )


reset_mock_state()


HOMEPAGE_TEMPLATE = """<!doctype html>
<html lang="en">
<head><meta charset="utf-8"><title>Vivastreet (mock)</title></head>
<body>
  <header>
    <a data-automation="lnkHeaderLogin" href="/account_classifieds.php">My Account</a>
  </header>

  {% if show_cookie_banner %}
  <div id="onetrust-banner-sdk" role="dialog" aria-label="Cookie consent">
    <p>We use cookies.</p>
    <button id="onetrust-accept-btn-handler"
            onclick="document.getElementById('onetrust-banner-sdk').remove()">Accept All</button>
  </div>
  {% endif %}

  <form id="homepage-search" onsubmit="return false;">
    <label for="category">Category</label>
    <select id="category" data-automation="categoryDropdown">
      <option value="" data-meta-code="">All categories</option>
      {% for label, cat_id, meta_code in categories %}
      <option value="{{ cat_id }}" data-meta-code="{{ meta_code }}">{{ label }}</option>
      {% endfor %}
    </select>

    <label for="location">Location</label>
    <select id="location" data-automation="searchGeoDropdown">
      <option value="0">All of UK</option>
      {% for label, geo_id in locations %}
      <option value="{{ geo_id }}">{{ label }}</option>
      {% endfor %}
    </select>

    <button type="button" data-automation="homepageSearchButton" onclick="runSearch()">Search</button>
  </form>

  <div id="vs-adult-disclaimer" hidden>
    <p>This section contains adult content.</p>
    <button id="accept-disclaimer" onclick="closeDisclaimer()">Agree</button>
    <button id="reject-disclaimer" onclick="closeDisclaimer()">Disagree</button>
  </div>

  <div data-automation="divResultsSummaryContainer"><b id="results-count"></b> results</div>

  <script>
    const SEARCH_URL = {{ search_url|tojson }};
    const GEO_ID_OVERRIDE = {{ geo_id_override|tojson }};
    const ADULT_META_CODES = {{ adult_meta_codes|tojson }};

    function closeDisclaimer() {
      document.getElementById('vs-adult-disclaimer').hidden = true;
    }

    async function runSearch() {
      const category = document.getElementById('category');
      const option = category.options[category.selectedIndex];
      const metaCode = option.dataset.metaCode;
      const geoId = GEO_ID_OVERRIDE !== null ? String(GEO_ID_OVERRIDE)
                                             : document.getElementById('location').value;

      const query = new URLSearchParams();
      query.append('geo_id', geoId);
      if (category.value) {
        query.append('cat_id', category.value);
        query.append('meta_code', metaCode);
      }
      query.append('summary', '1');
      query.append('country', 'GB');
      query.append('country_id', 'GB');

      if (ADULT_META_CODES.includes(metaCode)) {
        document.getElementById('vs-adult-disclaimer').hidden = false;
      }

      const response = await fetch(SEARCH_URL + '?' + query.toString(), {
        headers: {'X-Requested-With': 'XMLHttpRequest', 'Accept': 'application/json'}
      });
      const body = await response.json();
      document.getElementById('results-count').textContent = String(body.total || 0);
    }
  </script>
</body>
</html>
"""


def _category_by_id(cat_id: Optional[str]) -> Optional[Tuple[str, int, str]]:
    for entry in SITE_CATEGORIES:
        if str(entry[1]) == cat_id:
            return entry
    return None


def create_mock_site_app() -> Flask:
    """Create and configure the mock site Flask app."""
    app = Flask(__name__)
    app.config['TESTING'] = True

    @app.route('/')
    def homepage():
        return render_template_string(
            HOMEPAGE_TEMPLATE,
            categories=SITE_CATEGORIES,
            locations=SITE_LOCATIONS,
            search_url=SEARCH_PATH,
            geo_id_override=MOCK_STATE['geo_id_override'],
            adult_meta_codes=sorted(ADULT_META_CODES),
            show_cookie_banner=MOCK_STATE['show_cookie_banner'],
        )

    @app.route(SEARCH_PATH, methods=['GET'])
    def regions_tree():
        params = request.args.to_dict()
        MOCK_STATE['requests'].append(
            {
                'params': params,
                'xhr': request.headers.get('X-Requested-With') == 'XMLHttpRequest',
                'referer': request.headers.get('Referer'),
            }
        )

        status = MOCK_STATE['search_status']
        if status >= 400:
            return jsonify({"status": "error", "message": "Search backend unavailable"}), status

        category = _category_by_id(params.get('cat_id'))
        if params.get('cat_id') and (category is None or category[2] != params.get('meta_code')):
            # The real endpoint answers with an empty tree for unknown combinations
            return jsonify({"status": "ok", "params": params, "total": 0, "regions": []})

        return jsonify({
            "status": "ok",
            "params": params,
            "total": 42 if category else 1337,
            "regions": [{"geo_id": geo_id, "label": label} for label, geo_id in SITE_LOCATIONS],
        })

    return app
