import pytest
from bs4 import BeautifulSoup

from menuweek.meal import derive_price_labels, parse_meal, parse_price


def item(html: str):
    return BeautifulSoup(html, "html.parser").find(class_="item")


@pytest.mark.parametrize(
    "count, labels",
    [
        (1, ()),
        (2, ("students", "guests")),
        (3, ("students", "staff", "guests")),
        (4, ()),
    ],
)
def test_price_labels_follow_amount_count(count, labels):
    text = " / ".join(f"{n},50 €" for n in range(1, count + 1))
    price = parse_price(text)
    assert price.labels == labels
    assert price.values == tuple(n + 0.5 for n in range(1, count + 1))
    assert derive_price_labels(count) == labels


def test_price_without_amount_is_none():
    assert parse_price("Preis auf Anfrage") is None
    assert parse_price("") is None


def test_price_keeps_raw_text_and_currency():
    price = parse_price(" 2,50 €  /\n 4,00 € ")
    assert price.raw == "2,50 € / 4,00 €"
    assert price.currency == "EUR"
    assert price.to_dict() == {
        "raw": "2,50 € / 4,00 €",
        "currency": "EUR",
        "values": [2.5, 4.0],
        "labels": ["students", "guests"],
    }


def test_parse_meal_full_item():
    meal = parse_meal(
        item(
            '<div class="item item-tip"><h4>Chili  sin Carne <small>(a, c , ,12, a)</small></h4>'
            '<div class="price">2,50 € / 3,80 € / 4,90 €</div></div>'
        )
    )
    assert meal.title == "Chili sin Carne"
    assert meal.allergens == ("a", "c", "12")
    assert meal.allergens_raw == "a, c , ,12, a"
    assert meal.price.values == (2.5, 3.8, 4.9)
    assert meal.highlight is True


def test_parse_meal_without_annotation_or_price():
    meal = parse_meal(item('<div class="item"><h4>Salatbuffet</h4></div>'))
    assert meal.title == "Salatbuffet"
    assert meal.allergens == ()
    assert meal.allergens_raw is None
    assert meal.price is None
    assert meal.highlight is False
    assert meal.to_dict() == {
        "title": "Salatbuffet",
        "allergens": [],
        "allergensRaw": None,
        "price": None,
        "highlight": False,
    }


def test_parse_meal_leaves_source_tree_untouched():
    node = item('<div class="item"><h4>Suppe <small>(g)</small></h4></div>')
    parse_meal(node)
    assert node.find("small") is not None


def test_parse_meal_without_heading_has_empty_title():
    meal = parse_meal(item('<div class="item"><p>nur Text</p></div>'))
    assert meal.title == ""
