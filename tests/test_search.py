from paris_app.fallback import FALLBACK_DISTRICTS, FALLBACK_GREEN_SPACES, FALLBACK_UNITS
from paris_app.search import normalize_text, search


def run(query):
    return search(query, FALLBACK_UNITS, FALLBACK_DISTRICTS, FALLBACK_GREEN_SPACES)


def test_short_queries_return_nothing():
    assert not run("")
    assert not run("p")


def test_accent_insensitive():
    assert normalize_text("Arènes de Lutèce") == "arenes de lutece"
    assert [g.id for g in run("lutece").green_spaces] == ["ev5"]
    assert [d.id for d in run("vendome").districts] == ["q4"]


def test_unit_code_substring():
    results = run("12")
    assert "12" in [u.code for u in results.units]


def test_results_are_capped():
    results = run("parc")
    assert len(results.green_spaces) == 5
    assert len(run("arrondissement").units) == 3
