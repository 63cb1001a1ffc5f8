import pytest

from rightmove_mcp.config import Settings
from rightmove_mcp.errors import TransportFailure

SEARCH_HTML = """
<html><body>
<div class="searchHeader"><span class="searchHeader-resultCount">1,234</span></div>
<div class="l-searchResults">
  <div class="l-searchResult">
    <a href="/property-12345678.html">
      <div class="propertyCard-img"><img src="https://media.rightmove.co.uk/1.jpg" alt=""></div>
    </a>
    <h2 class="propertyCard-title">3 bedroom semi-detached house for sale</h2>
    <div class="propertyCard-priceValue">£450,000</div>
    <address class="propertyCard-address">Firgrove Hill, Farnham, Surrey</address>
    <div class="propertyCard-type">Semi-Detached</div>
    <span class="propertyCard-description">A lovely home with 2 bathrooms and a garden.</span>
    <div class="propertyCard-contactsItem-company">Bridges Estate Agents</div>
    <div class="propertyCard-branchSummary-addedOrReduced"><span>Added on 12/09/2026</span></div>
  </div>
  <div class="l-searchResult">
    <a href="/property-87654321.html">
      <div class="propertyCard-img"><img src="" data-lazy-src="https://media.rightmove.co.uk/2.jpg"></div>
    </a>
    <h2 class="propertyCard-title">Studio apartment for sale</h2>
    <div class="propertyCard-priceValue">£210,000</div>
    <address class="propertyCard-address">The Borough, Farnham</address>
    <span class="propertyCard-description">Bright studio close to the station.</span>
  </div>
  <div class="l-searchResult">
    <a href="/new-homes/development-42.html">Development</a>
    <h2 class="propertyCard-title">New homes at Brightwells</h2>
  </div>
  <div class="l-searchResult">
    <a href="/property-99999999.html">Untitled</a>
    <div class="propertyCard-priceValue">£1</div>
  </div>
</div>
</body></html>
"""

DETAIL_HTML = """
<html><body>
<h1>4 bedroom detached house for sale</h1>
<h1>Similar properties</h1>
<div class="_1gfnqJ3Vtd1z40MlC0MzXu"><span>£1,050,000</span><span>Guide Price</span></div>
<div class="WJG_W5-Y4EEYYiG-9-6KJ">Tilford Road, Farnham, GU9 8DJ</div>
<div id="property-description">
  <div class="STw8udCxUaBUMfOOZu0iL _3nPVD8y1gPjYEgMtf6xC2l">A handsome family home.</div>
</div>
<ul class="lIhZ24u1NjKWbswEMIUYFS">
  <li>Four bedrooms</li>
  <li>   </li>
  <li>Double garage</li>
</ul>
<div class="_2ZNXb7csRmW8bV_GFGUUgK"><img src="https://media.rightmove.co.uk/floorplan.png"></div>
<div class="_2yl-M5w4_W7_bPcyZsS8aH">
  <img src="https://media.rightmove.co.uk/a.jpg">
  <img data-src="https://media.rightmove.co.uk/b.jpg">
  <img alt="no source">
  <img src="https://media.rightmove.co.uk/a.jpg">
</div>
<div class="_2E1qBJkWUYMJYHfYJzUb_r">Bridges Estate Agents</div>
<a href="tel:01252123456">01252 123456</a>
<div class="_2w3iWfHdXvgf4aKdCEOD-Z">55 West Street, Farnham</div>
<dl class="_1u12RxIYGO3uXgeJyApCVH"><dt>PROPERTY TYPE</dt><dd>Detached</dd></dl>
<dl class="_1u12RxIYGO3uXgeJyApCVH"><dt>BEDROOMS</dt><dd>4</dd></dl>
<dl class="_1u12RxIYGO3uXgeJyApCVH"><dt>TENURE</dt><dd></dd></dl>
<dl class="_1u12RxIYGO3uXgeJyApCVH"><dt></dt><dd>orphan value</dd></dl>
<dl class="_1u12RxIYGO3uXgeJyApCVH"><dt>BEDROOMS</dt><dd>5</dd></dl>
</body></html>
"""

STATS_HTML = """
<html><body>
<table class="ksc_average-prices">
  <tr><th class="ksc_table-header-cell">All property types</th><td class="ksc_table-data-cell">£650,000</td></tr>
  <tr><th class="ksc_table-header-cell">Detached</th><td class="ksc_table-data-cell">£850,000</td></tr>
  <tr><th class="ksc_table-header-cell">  </th><td class="ksc_table-data-cell">£1</td></tr>
  <tr><td class="ksc_note">n/a</td><td class="ksc_table-data-cell">£2</td></tr>
  <tr><th class="ksc_table-header-cell">Flat</th><td class="ksc_table-data-cell"> </td></tr>
</table>
<table class="ksc_price-changes">
  <tr><th class="ksc_table-header-cell">1 Year</th><td class="ksc_table-data-cell">+5.2%</td></tr>
</table>
<div class="ksc_sales-volume">142 properties sold in last 12 months</div>
<div class="ksc_time-on-market">Average 45 days on market</div>
</body></html>
"""


class FakeFetcher:
    """Stands in for HttpClient.get_html; records every URL it is asked for."""

    def __init__(self, html="", error=None):
        self.html = html
        self.error = error
        self.calls = []

    def __call__(self, url):
        self.calls.append(url)
        if self.error is not None:
            raise self.error
        return self.html


@pytest.fixture
def settings():
    return Settings()


@pytest.fixture
def search_html():
    return SEARCH_HTML


@pytest.fixture
def detail_html():
    return DETAIL_HTML


@pytest.fixture
def stats_html():
    return STATS_HTML


@pytest.fixture
def fetcher():
    return FakeFetcher()


@pytest.fixture
def blocked_fetcher():
    return FakeFetcher(error=TransportFailure("Request failed with status code 403", status=403))
