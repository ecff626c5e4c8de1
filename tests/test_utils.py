from inkwell import utils


def test_has_extension_is_case_insensitive():
    assert utils.has_extension("post.md", ".md")
    assert utils.has_extension("POST.MD", ".md")
    assert utils.has_extension("notes.Md", ".MD")
    assert not utils.has_extension("post.markdown", ".md")
    assert not utils.has_extension("md", ".md")
    assert utils.has_extension("anything.txt", "")


def test_strip_extension_removes_last_suffix_only():
    assert utils.strip_extension("hello-world.md") == "hello-world"
    assert utils.strip_extension("release.v2.md") == "release.v2"
    assert utils.strip_extension("README") == "README"
    assert utils.strip_extension(".md") == ""


def test_titleize():
    assert utils.titleize("hello-world") == "Hello World"
    assert utils.titleize("snake_case_name") == "Snake Case Name"
    assert utils.titleize("---") == "Untitled"


def test_generate_heading_id_and_strip_tags():
    assert utils.generate_heading_id("Hello World") == "hello-world"
    assert utils.generate_heading_id("What's <code>new</code>?") == "whats-new"
    assert utils.generate_heading_id("Tom &amp; Jerry") == "tom-jerry"
    assert utils.generate_heading_id("  --  ") == ""
    assert utils.strip_tags("<em>a</em> &lt;b&gt;") == "a <b>"


def test_escape_html():
    assert utils.escape_html('<a href="x">&</a>') == "&lt;a href=&quot;x&quot;&gt;&amp;&lt;/a&gt;"
