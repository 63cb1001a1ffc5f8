from rightmove_mcp.parsers import (
    DetailParser,
    ListingParser,
    StatisticsParser,
    clean_text,
    make_soup,
    pair_cells,
)

BASE = "https://www.rightmove.co.uk"


# ---------- Search results ----------

def test_listing_cards(search_html):
    results = ListingParser(BASE).parse(make_soup(search_html))
    assert results.total_results == "1,234"
    assert [p.id for p in results.properties] == ["12345678", "87654321"]

    first = results.properties[0]
    assert first.title == "3 bedroom semi-detached house for sale"
    assert first.price == "£450,000"
    assert first.address == "Firgrove Hill, Farnham, Surrey"
    assert first.property_type == "Semi-Detached"
    assert first.bedrooms == 3
    assert first.bathrooms == 2
    assert first.image_url == "https://media.rightmove.co.uk/1.jpg"
    assert first.url == "https://www.rightmove.co.uk/property-12345678.html"
    assert first.agent == "Bridges Estate Agents"
    assert first.date_added == "Added on 12/09/2026"


def test_partial_card_keeps_empty_strings_and_drops_optionals(search_html):
    studio = ListingParser(BASE).parse(make_soup(search_html)).properties[1]
    assert studio.image_url == "https://media.rightmove.co.uk/2.jpg"
    assert studio.property_type == ""
    assert studio.agent == ""
    assert studio.bedrooms is None
    assert studio.bathrooms is None
    assert studio.date_added is None

    d = studio.to_dict()
    assert d["agent"] == ""
    for key in ("bedrooms", "bathrooms", "dateAdded"):
        assert key not in d
    assert d["imageUrl"] == "https://media.rightmove.co.uk/2.jpg"


def test_card_with_unmatched_link_is_dropped():
    html = """
    <div class="l-searchResult">
      <a href="/new-homes/development-42.html">Dev</a>
      <h2 class="propertyCard-title">New homes at Brightwells</h2>
    </div>
    """
    assert ListingParser(BASE).parse(make_soup(html)).properties == []


def test_card_without_title_is_dropped():
    html = '<div class="l-searchResult"><a href="/property-1.html">x</a></div>'
    assert ListingParser(BASE).parse(make_soup(html)).properties == []


def test_no_cards_is_an_empty_result():
    results = ListingParser(BASE).parse(make_soup("<html><body><p>Access denied</p></body></html>"))
    assert results.properties == []
    assert results.total_results == ""


def test_bed_and_bath_take_the_first_match():
    html = """
    <div class="l-searchResult">
      <a href="/property-5.html"></a>
      <h2 class="propertyCard-title">2 Bed flat</h2>
      <span class="propertyCard-description">Was a 3 bed, now 1 BATH and 4 baths upstairs</span>
    </div>
    """
    listing = ListingParser(BASE).parse(make_soup(html)).properties[0]
    assert listing.bedrooms == 2
    assert listing.bathrooms == 1


# ---------- Property details ----------

def test_detail_page(detail_html):
    detail = DetailParser(BASE).parse(make_soup(detail_html), "12345678")
    assert detail.id == "12345678"
    assert detail.title == "4 bedroom detached house for sale"
    assert detail.price == "£1,050,000"
    assert detail.address == "Tilford Road, Farnham, GU9 8DJ"
    assert detail.description == "A handsome family home."
    assert detail.key_features == ["Four bedrooms", "Double garage"]
    assert detail.floorplan == "https://media.rightmove.co.uk/floorplan.png"
    assert detail.images == [
        "https://media.rightmove.co.uk/a.jpg",
        "https://media.rightmove.co.uk/b.jpg",
    ]
    assert detail.agent.name == "Bridges Estate Agents"
    assert detail.agent.phone == "01252 123456"
    assert detail.agent.address == "55 West Street, Farnham"


def test_detail_rows_skip_blanks_and_last_label_wins(detail_html):
    detail = DetailParser(BASE).parse(make_soup(detail_html), "12345678")
    assert detail.property_details == {"PROPERTY TYPE": "Detached", "BEDROOMS": "5"}


def test_empty_detail_page_defaults_everything():
    detail = DetailParser(BASE).parse(make_soup("<html><body></body></html>"), "42")
    assert detail.key_features == []
    assert detail.images == []
    assert detail.property_details == {}
    assert detail.floorplan is None
    assert detail.title == ""
    d = detail.to_dict()
    assert "floorplan" not in d
    assert d["agent"] == {"name": "", "phone": "", "address": ""}


# ---------- Area statistics ----------

def test_average_prices(stats_html):
    stats = StatisticsParser(BASE).parse(make_soup(stats_html), "Farnham")
    assert stats.location == "Farnham"
    assert stats.average_prices == {"All property types": "£650,000", "Detached": "£850,000"}


def test_price_changes_and_summaries(stats_html):
    stats = StatisticsParser(BASE).parse(make_soup(stats_html), "Farnham")
    assert stats.price_changes == {"1 Year": "+5.2%"}
    assert stats.sales_volume == "142 properties sold in last 12 months"
    assert stats.time_on_market == "Average 45 days on market"


def test_cell_with_blank_header_is_skipped():
    html = """
    <table><tr>
      <th class="ksc_table-header-cell"></th><td class="ksc_table-data-cell">£300,000</td>
    </tr></table>
    """
    stats = StatisticsParser(BASE).parse(make_soup(html), "Anywhere")
    assert stats.average_prices == {}


def test_missing_statistics_sections_default():
    stats = StatisticsParser(BASE).parse(make_soup("<p>nothing here</p>"), "Nowhere")
    assert stats.to_dict() == {
        "location": "Nowhere",
        "averagePrices": {},
        "priceChanges": {},
        "salesVolume": "",
        "timeOnMarket": "",
        "url": "",
    }


# ---------- Helpers ----------

def test_clean_text():
    assert clean_text("  £450,000\n  Guide   price ") == "£450,000 Guide price"
    assert clean_text(None) == ""


def test_pair_cells():
    assert pair_cells([("a", "1"), ("", "2"), ("b", ""), ("a", "3")]) == {"a": "3"}


def test_header_cell_on_its_own_indented_line():
    html = """
    <table class="ksc_average-prices">
      <tr>
        <th class="ksc_table-header-cell">
          Semi-detached
        </th>
        <td class="ksc_table-data-cell">
          £575,000
        </td>
      </tr>
      <tr>
        <td class="ksc_note">n/a</td>

        <td class="ksc_table-data-cell">£1</td>
      </tr>
    </table>
    <table class="ksc_price-changes">
      <tr>
        <th class="ksc_table-header-cell">5 Years</th>
        <td class="ksc_table-data-cell">+18.0%</td>
      </tr>
    </table>
    """
    stats = StatisticsParser(BASE).parse(make_soup(html), "Farnham")
    assert stats.average_prices == {"Semi-detached": "£575,000"}
    assert stats.price_changes == {"5 Years": "+18.0%"}
