"""
Unit tests for path-based element construction.

Intermediate segments reuse the first matching child; the terminal segment
always appends a new child.
"""

import pytest
from lxml import etree

from edi_exchange.exceptions import InvalidPathError
from edi_exchange.parsers.element_path import ElementPath, add_element, has_node


def render(root) -> str:
    return etree.tostring(root, encoding='unicode')


class TestElementPath:
    """Test suite for ElementPath parsing."""

    def test_parse_splits_segments(self):
        path = ElementPath.parse('Shipment/D/E')

        assert path.segments == ('Shipment', 'D', 'E')
        assert path.intermediate == ('Shipment', 'D')
        assert path.terminal == 'E'

    def test_single_segment_has_no_intermediate(self):
        path = ElementPath.parse('Shipment')

        assert path.intermediate == ()
        assert path.terminal == 'Shipment'

    def test_str_round_trips(self):
        assert str(ElementPath.parse('A/B/C')) == 'A/B/C'

    def test_parse_returns_existing_path_unchanged(self):
        path = ElementPath.parse('A/B')
        assert ElementPath.parse(path) is path

    @pytest.mark.parametrize('bad_path', ['', 'A//B', '/A', 'A/'])
    def test_parse_rejects_empty_segments(self, bad_path):
        with pytest.raises(InvalidPathError):
            ElementPath.parse(bad_path)

    def test_direct_construction_requires_a_segment(self):
        with pytest.raises(InvalidPathError):
            ElementPath(())


class TestAddElement:
    """Test suite for add_element() construction semantics."""

    def test_terminal_segment_always_creates_sibling(self):
        """Adding the same single-segment path twice gives two siblings."""
        root = etree.Element('Test')

        add_element(root, 'Shipment')
        add_element(root, 'Shipment')

        assert render(root) == '<Test><Shipment/><Shipment/></Test>'

    def test_value_becomes_text(self):
        root = etree.Element('Test')

        node = add_element(root, 'A', '1')

        assert node.text == '1'
        assert render(root) == '<Test><A>1</A></Test>'

    def test_empty_value_leaves_element_empty(self):
        root = etree.Element('Test')

        node = add_element(root, 'A', '')

        assert node.text is None

    def test_intermediate_reuses_first_match(self):
        """B and C both land under the first Shipment; no third Shipment appears."""
        root = etree.Element('Test')
        add_element(root, 'Shipment')
        add_element(root, 'Shipment')
        add_element(root, 'A', '1')

        add_element(root, 'Shipment/B')
        add_element(root, 'Shipment/C', '2')

        assert render(root) == (
            '<Test><Shipment><B/><C>2</C></Shipment><Shipment/><A>1</A></Test>'
        )
        assert len(root.findall('Shipment')) == 2

    def test_missing_intermediate_is_created(self):
        root = etree.Element('Test')
        add_element(root, 'Shipment')
        add_element(root, 'Shipment/B')
        add_element(root, 'Shipment/C', '2')

        node = add_element(root, 'Shipment/D/E', '3')

        assert node.tag == 'E'
        assert node.getparent().tag == 'D'
        assert render(root) == (
            '<Test><Shipment><B/><C>2</C><D><E>3</E></D></Shipment></Test>'
        )

    def test_returns_created_node(self):
        root = etree.Element('Test')

        node = add_element(root, 'A/B/C')

        assert node is root.find('A/B/C')

    def test_segment_names_are_case_sensitive(self):
        root = etree.Element('Test')
        add_element(root, 'shipment')

        add_element(root, 'Shipment/B')

        assert [child.tag for child in root] == ['shipment', 'Shipment']

    def test_cursor_need_not_be_root(self):
        root = etree.Element('Test')
        header = add_element(root, 'Header')

        add_element(header, 'Address/City', 'Minneapolis')

        assert root.findtext('Header/Address/City') == 'Minneapolis'

    def test_invalid_tag_name_raises_invalid_path(self):
        root = etree.Element('Test')

        with pytest.raises(InvalidPathError):
            add_element(root, 'Bad Name')

    def test_empty_path_raises(self):
        with pytest.raises(InvalidPathError):
            add_element(etree.Element('Test'), '')


class TestHasNode:
    """Test suite for has_node() lookups."""

    def test_every_prefix_of_created_path_exists(self):
        root = etree.Element('Test')
        add_element(root, 'A/B/C')

        assert has_node(root, 'A')
        assert has_node(root, 'A/B')
        assert has_node(root, 'A/B/C')

    def test_missing_paths(self):
        root = etree.Element('Test')
        add_element(root, 'A/B/C')

        assert not has_node(root, 'D')
        assert not has_node(root, 'D/E')
        assert not has_node(root, 'B')

    def test_does_not_mutate_tree(self):
        root = etree.Element('Test')
        add_element(root, 'A')
        before = render(root)

        assert not has_node(root, 'X/Y/Z')
        assert render(root) == before

    @pytest.mark.parametrize('path, value', [
        ('A', None),
        ('A/B', '1'),
        ('Shipment/D/E', '3'),
        ('Header/Address/City', 'St. Paul'),
    ])
    def test_added_path_is_found(self, path, value):
        root = etree.Element('Test')

        add_element(root, path, value)

        assert has_node(root, path)

    def test_empty_path_raises(self):
        with pytest.raises(InvalidPathError):
            has_node(etree.Element('Test'), '')


class TestSegmentNames:
    """Segments are exact element names, never lxml tag filters."""

    @pytest.mark.parametrize('bad_path', ['*', 'A/*', '*/X', '{urn:x}A', 'A/{urn:x}B', 'Bad Name/X'])
    def test_parse_rejects_non_names(self, bad_path):
        with pytest.raises(InvalidPathError):
            ElementPath.parse(bad_path)

    def test_wildcard_is_not_a_lookup(self):
        root = etree.fromstring('<Test><A/></Test>')

        with pytest.raises(InvalidPathError):
            has_node(root, '*')

    def test_wildcard_does_not_descend_into_other_elements(self):
        root = etree.fromstring('<Test><A/></Test>')

        with pytest.raises(InvalidPathError):
            add_element(root, '*/X')

        assert render(root) == '<Test><A/></Test>'

    def test_comments_are_skipped_when_descending(self):
        root = etree.fromstring('<Test><!-- note --><A/></Test>')

        add_element(root, 'A/B')

        assert render(root) == '<Test><!-- note --><A><B/></A></Test>'
