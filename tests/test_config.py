import pytest

from elastic_ransack import config
from elastic_ransack.compiler import QueryCompiler


@pytest.fixture
def fresh_settings(monkeypatch):
    monkeypatch.setattr(config, "_settings", config.Settings())
    monkeypatch.setattr(config, "_locked", False)


def test_defaults():
    settings = config.Settings()
    assert settings.locale() == "en"
    assert settings.default_per_page == 50
    assert settings.or_separator == "_or_"
    assert settings.escape_free_text


def test_configure_before_use(fresh_settings):
    config.configure(locale=lambda: "it", boolean_prefixes=("is_", "has_"))

    compiler = QueryCompiler()
    assert compiler.locale == "it"
    assert compiler.compile({"has_kids_eq": "1"}).filters == ({"term": {"has_kids": True}},)


def test_configure_after_use_raises(fresh_settings):
    config.get_settings()
    with pytest.raises(RuntimeError):
        config.configure(locale=lambda: "it")


def test_escape_default_comes_from_settings(fresh_settings):
    config.configure(escape_free_text=False)
    compiled = QueryCompiler().compile({"q_cont": "a+b"})
    assert compiled.free_text == {"query_string": {"query": "(a+b)"}}
