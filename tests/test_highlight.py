from ChatMarkdown.highlight import pygments_highlighter


def test_tokens_cover_raw_text():
    raw = "def f():\n    return 1\n\n"
    tokens = pygments_highlighter()("python", raw)
    assert "".join(token.text for token in tokens) == raw


def test_keywords_are_styled():
    tokens = pygments_highlighter()("python", "def f():\n    return 1")
    keywords = [token for token in tokens if token.token_type.startswith("Token.Keyword")]
    assert keywords
    assert all(token.style.color for token in keywords)


def test_unknown_language_falls_back_to_plain_text():
    tokens = pygments_highlighter()("no-such-language", "just text")
    assert "".join(token.text for token in tokens) == "just text"
    assert pygments_highlighter()(None, "x") is not None


def test_empty_code_is_not_highlighted():
    assert pygments_highlighter()("python", "") is None


def test_unknown_style_falls_back(caplog):
    highlight = pygments_highlighter("no-such-style")
    assert highlight("python", "x = 1")
    assert "Unknown Pygments style" in caplog.text
