import pytest

from pagescrape.config import DEFAULT_EXCLUDE_SELECTORS
from pagescrape.errors import SectionsNotFoundSignal
from pagescrape.extraction import (
    Image,
    Link,
    ListBlock,
    StructuredExtractor,
    extract_plain_text,
    load_document,
)
from pagescrape.extraction.document import remove_excluded

PAGE_URL = "https://example.com/blog/page"

ARTICLE_HTML = """
<html>
<head><title>  Fixture
   Page </title></head>
<body>
  <nav><a href="/home">Home</a><h2>Site menu</h2><img src="/nav-icon.png" alt="Menu"></nav>
  <h1>Main Title</h1>
  <div class="intro">Intro text <span>inline span</span></div>
  <p>First paragraph with <a href="/about">About us</a>.</p>
  <p>   </p>
  <h2>Sub heading</h2>
  <ul><li>One</li><li> </li><li>Two</li></ul>
  <ol><li>  </li></ol>
  <img src="/logo.png" alt="Logo">
  <img src="">
  <a href="https://other.example/x">  </a>
  <script>var tracking = 1;</script>
  <footer><h3>Footer heading</h3>Footer text<img src="/badge.png" alt="Badge"></footer>
</body>
</html>
"""

SECTIONS_HTML = """
<html><head><title>Sections</title></head><body>
  <article id="a1"><h2>First</h2><p>Alpha</p></article>
  <article class="post featured"><p>Beta</p></article>
  <div class="card"><p>Gamma</p><a href="rel/link">Card link</a></div>
  <article><h3>Third</h3><p>Delta</p></article>
  <p>Outside</p>
</body></html>
"""


def extract(html, exclude=DEFAULT_EXCLUDE_SELECTORS, sections=()):
    document = load_document(html, PAGE_URL)
    return StructuredExtractor().extract(document, exclude, sections)


class TestStructuredExtraction:

    def test_title_is_whitespace_collapsed(self):
        assert extract(ARTICLE_HTML).title == "Fixture Page"

    def test_headings_grouped_by_level(self):
        result = extract(ARTICLE_HTML)
        assert result.headings == {'h1': ['Main Title'], 'h2': ['Sub heading']}
        assert result.heading_texts() == ['Main Title', 'Sub heading']

    def test_paragraphs_skip_blank(self):
        assert extract(ARTICLE_HTML).paragraphs == ['First paragraph with About us.']

    def test_links_resolved_and_empty_text_dropped(self):
        result = extract(ARTICLE_HTML)
        assert result.links == [Link(text='About us', href='https://example.com/about')]

    def test_excluded_elements_contribute_nothing(self):
        result = extract(ARTICLE_HTML)
        all_text = ' '.join(result.paragraphs + result.other_text + [l.text for l in result.links])
        assert 'Home' not in all_text
        assert 'Footer text' not in all_text
        assert 'tracking' not in all_text

    def test_excluded_headings_and_images_are_dropped(self):
        result = extract(ARTICLE_HTML)
        assert 'Site menu' not in result.heading_texts()
        assert 'h3' not in result.headings
        assert [image.src for image in result.images] == ['https://example.com/logo.png']

        unfiltered = extract(ARTICLE_HTML, exclude=())
        assert unfiltered.headings['h2'] == ['Site menu', 'Sub heading']
        assert unfiltered.headings['h3'] == ['Footer heading']
        assert 'https://example.com/badge.png' in [image.src for image in unfiltered.images]

    def test_lists_keep_only_non_empty_items(self):
        assert extract(ARTICLE_HTML).lists == [ListBlock(type='ul', items=['One', 'Two'])]

    def test_images_need_a_src(self):
        assert extract(ARTICLE_HTML).images == [
            Image(src='https://example.com/logo.png', alt='Logo', title='')
        ]

    def test_other_text_skips_structural_parents(self):
        assert extract(ARTICLE_HTML).other_text == ['Intro text', 'inline span']

    def test_without_exclusions_nav_is_kept(self):
        result = extract(ARTICLE_HTML, exclude=())
        assert Link(text='Home', href='https://example.com/home') in result.links

    def test_base_href_changes_link_resolution(self):
        html = '<html><head><base href="https://cdn.example/assets/"></head>' \
               '<body><a href="x.html">X</a><img src="y.png"></body></html>'
        result = extract(html)
        assert result.links[0].href == 'https://cdn.example/assets/x.html'
        assert result.images[0].src == 'https://cdn.example/assets/y.png'

    def test_extraction_is_deterministic(self):
        first = extract(ARTICLE_HTML).to_dict()
        second = extract(ARTICLE_HTML).to_dict()
        assert first == second

    def test_to_dict_shape(self):
        data = extract(ARTICLE_HTML).to_dict()
        assert set(data) == {'title', 'headings', 'paragraphs', 'other_text', 'links', 'lists', 'images'}
        assert data['links'] == [{'text': 'About us', 'href': 'https://example.com/about'}]


class TestSections:

    def test_sections_in_selector_then_document_order(self):
        result = extract(SECTIONS_HTML, sections=['article', '.card', '#a1'])
        assert [s.id for s in result.sections] == ['a1', 'post featured', 'section-2', 'card']
        assert [s.title for s in result.sections] == ['First', None, 'Third', None]

    def test_section_fields_come_from_their_subtree(self):
        result = extract(SECTIONS_HTML, sections=['.card'])
        card = result.sections[0]
        assert card.paragraphs == ['Gamma']
        assert card.links == [Link(text='Card link', href='https://example.com/blog/rel/link')]

    def test_section_mode_leaves_top_level_empty(self):
        result = extract(SECTIONS_HTML, sections=['article'])
        assert result.is_sectioned
        assert result.paragraphs == []
        assert set(result.to_dict()) == {'title', 'sections'}
        assert result.all_paragraphs() == ['Alpha', 'Beta', 'Delta']

    def test_identical_looking_elements_are_distinct_sections(self):
        html = '<body><div class="x"><p>Same</p></div><div class="x"><p>Same</p></div></body>'
        result = extract(html, sections=['.x', 'div'])
        assert len(result.sections) == 2

    def test_same_element_matched_twice_is_kept_once(self):
        result = extract(SECTIONS_HTML, sections=['#a1', 'article'])
        assert [s.id for s in result.sections] == ['a1', 'post featured', 'section-2']

    def test_no_match_raises_signal(self):
        with pytest.raises(SectionsNotFoundSignal) as exc_info:
            extract(SECTIONS_HTML, sections=['.missing'])
        assert exc_info.value.selectors == ['.missing']
        assert str(exc_info.value) == 'No sections found with selectors: .missing'

    def test_excluded_sections_are_not_found(self):
        with pytest.raises(SectionsNotFoundSignal):
            extract(SECTIONS_HTML, exclude=['article', '.card'], sections=['article'])


class TestPlainText:

    def test_text_normalised_and_excludes_removed(self):
        html = "<html><body><script>x=1</script><style>p{}</style>" \
               "<p>Hello</p>\n\n  <div>big   world</div></body></html>"
        result = extract_plain_text(load_document(html, PAGE_URL), ['script', 'style'])
        assert result.text == 'Hello big world'
        assert result.length == len('Hello big world')

    def test_default_exclusions(self):
        result = extract_plain_text(load_document(ARTICLE_HTML, PAGE_URL), DEFAULT_EXCLUDE_SELECTORS)
        assert result.text.startswith('Main Title Intro text inline span First paragraph')
        assert 'Footer' not in result.text
        assert 'tracking' not in result.text

    def test_empty_body(self):
        result = extract_plain_text(load_document('<html><body></body></html>'))
        assert result.text == ''
        assert result.length == 0


def test_remove_excluded_counts_in_order():
    document = load_document('<body><div class="a"><p class="b">x</p></div><p class="b">y</p></body>')
    # the first selector already detached one of the .b paragraphs
    assert remove_excluded(document, ['.a', '.b']) == 2
    assert document.soup.find('p') is None
