from app.services.content_parser import ContentParser
from app.services.front_matter import parse_post


def test_get_markdown_content_reads_file(tmp_path):
    (tmp_path / "posts").mkdir()
    (tmp_path / "posts" / "a.md").write_text("---\ntitle: A\n---\nbody", encoding="utf-8")

    parser = ContentParser(tmp_path)

    assert parser.get_markdown_content({"path": "posts/a.md"}) == "---\ntitle: A\n---\nbody"


def test_get_markdown_content_drops_invalid_utf8(tmp_path):
    (tmp_path / "a.md").write_bytes(b"hello \xffworld")

    parser = ContentParser(tmp_path)

    assert parser.get_markdown_content({"path": "a.md"}) == "hello world"


def test_get_markdown_content_returns_empty_when_file_vanished(tmp_path, caplog):
    parser = ContentParser(tmp_path)

    with caplog.at_level("WARNING"):
        assert parser.get_markdown_content({"path": "posts/gone.md"}) == ""

    assert any("posts/gone.md" in rec.message for rec in caplog.records)


def test_get_markdown_content_strips_byte_order_mark(tmp_path):
    text = "---\ntitle: X\ndate: 2023-01-01\n---\nbody\n"
    (tmp_path / "posts").mkdir()
    (tmp_path / "posts" / "bom.md").write_bytes(b"\xef\xbb\xbf" + text.encode("utf-8"))

    parser = ContentParser(tmp_path)
    markdown = parser.get_markdown_content({"path": "posts/bom.md"})

    assert markdown == text
    post = parse_post(markdown, path="posts/bom.md", slug="bom")
    assert post.front_matter.title == "X"
