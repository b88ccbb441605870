from chronoline.data.catalogue import family_note, load_catalogue
from chronoline.utils.palette import ALIASES, DEFAULT_STYLE, TRADITION_STYLES, resolve_style


def test_known_tradition_style():
    assert resolve_style("buddhism").primary == (16, 185, 129)


def test_alias_and_case_insensitive_lookup():
    assert resolve_style("Taoism") is TRADITION_STYLES["daoism"]


def test_first_matching_key_wins():
    assert resolve_style("jainism", "islam") is TRADITION_STYLES["islam"]


def test_resolve_is_total():
    assert resolve_style() is DEFAULT_STYLE
    assert resolve_style(None, "", "nope") is DEFAULT_STYLE
    for entity in load_catalogue():
        assert resolve_style(entity.id, entity.category) is not None


def test_catalogue_contents():
    entities = load_catalogue()
    assert len(entities) == 15
    assert len({e.id for e in entities}) == 15
    years = {e.id: e.year for e in entities}
    assert years["indigenous"] == -10000
    assert years["buddhism"] == -480
    assert years["absurdism"] == 1942
    assert all(-12000 <= e.year <= 2024 for e in entities)


def test_family_note_fallback():
    assert "Asia" in family_note("Eastern")
    assert family_note("Gnostic").startswith("Gnostic represents")


def test_every_style_is_reachable_from_the_catalogue():
    keys = set()
    for entity in load_catalogue():
        keys.add(entity.id)
        keys.add(entity.category.lower())
    keys |= {ALIASES.get(k, k) for k in keys}
    assert "advaita" not in TRADITION_STYLES
    assert set(TRADITION_STYLES) <= keys
