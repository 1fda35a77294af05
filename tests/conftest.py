import pytest

from menuweek.config import CanteenConfig

YEAR_END_PAGE = """
<!DOCTYPE html>
<html lang="de">
<body>
<div class="box-speiseplan">
  <div class="block-space">
    <h2>Speiseplan vom 30.12.2024 bis 03.01.2025</h2>
    <div class="week">
      <div class="day">Mo, 30.12.</div>
      <div class="day">Di, 31.12.</div>
      <div class="day">Do, 02.01.</div>
    </div>
    <div class="dishes">
      <div class="row list-dish">
        <div class="col-md-6">
          <h3>Hauptgerichte</h3>
          <div class="item item-tip">
            <h4>Currywurst   mit
              Pommes <small>(a, c, 12)</small></h4>
            <div class="price">2,50 &euro; / 3,80 &euro; / 4,90 &euro;</div>
          </div>
          <div class="item">
            <h4>Gemüsepfanne</h4>
            <div class="price">1,90 &euro; / 3,20 &euro;</div>
          </div>
        </div>
        <div class="col-md-6">
          <h3>Beilagen</h3>
          <div class="item"><h4>Reis <small>(a)</small></h4></div>
          <h3>Dessert</h3>
        </div>
      </div>
      <div class="row list-dish">
        <div class="col-md-6">
          <div class="item"><h4>Eintopf</h4><div class="price">3,00 &euro;</div></div>
        </div>
      </div>
      <div class="row list-dish">
        <div class="col-md-6">
          <h3>Aktion</h3>
          <div class="item"><h4>Neujahrsbrezel</h4></div>
        </div>
      </div>
    </div>
  </div>
  <h3>Erläuterungen zu den Kennzeichnungen</h3>
  <div class="row">
    <div class="col-sm-4">Kennzeichnungen: (V) vegan, (VG) vegetarisch, (R) mit Rind.</div>
    <div class="col-sm-4">Allergene: a) Gluten, a1) Weizen, c) Eier.</div>
    <div class="col-sm-4">Zusatzstoffe: 1) mit Farbstoff, 12) mit Süßungsmittel.</div>
  </div>
</div>
</body>
</html>
"""


def single_day_page(heading: str, label: str, dish: str) -> str:
    """A minimal page with one week container holding a single day."""
    return f"""
<div class="box-speiseplan">
  <div class="block-space">
    <h2>{heading}</h2>
    <div class="week"><div class="day">{label}</div></div>
    <div class="dishes">
      <div class="row list-dish">
        <div class="col-md-6">
          <h3>Tagesgericht</h3>
          <div class="item"><h4>{dish}</h4><div class="price">2,10 &euro; / 4,20 &euro;</div></div>
        </div>
      </div>
    </div>
  </div>
</div>
"""


@pytest.fixture
def year_end_page() -> str:
    return YEAR_END_PAGE


@pytest.fixture
def canteens():
    # deliberately not in slug order
    return (
        CanteenConfig(slug="zeta", name="Mensa Zeta", url="https://example.org/zeta/"),
        CanteenConfig(slug="alpha", name="Mensa Alpha", url="https://example.org/alpha/"),
    )
