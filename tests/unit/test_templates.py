#!/usr/bin/env python3
"""
Tests for template name mangling
"""

import pytest

from core.templates import (
    get_matching_brackets, preprocess_template, mangle_template_name, split_top_level,
    strip_template_suffix,
)


class TestMatchingBrackets:
    def test_single_argument(self):
        assert get_matching_brackets("CExoArrayList<int>") == ["int"]

    def test_nested_brackets_return_outer_span(self):
        assert get_matching_brackets("A<B<C>, D>") == ["B<C>, D"]

    def test_sibling_lists_left_to_right(self):
        assert get_matching_brackets("A<B> x C<D>") == ["B", "D"]

    def test_unmatched_bracket_is_an_operator(self):
        assert get_matching_brackets("operator<") == []
        assert get_matching_brackets("operator<=") == []

    def test_no_brackets(self):
        assert get_matching_brackets("CNWSObject") == []

    @pytest.mark.parametrize("spelling", [
        "CExoArrayList<CNWSObject *>",
        "CExoLinkedList<CExoArrayList<unsigned long>>",
        "std::map<CExoString, CResRef>",
    ])
    def test_spans_reproduce_balanced_brackets(self, spelling):
        for span in get_matching_brackets(spelling):
            assert "<" + span + ">" in spelling
            assert span.count("<") == span.count(">")


class TestMangling:
    def test_pointer_argument(self):
        assert mangle_template_name("CExoArrayList<CNWSObject *>") == "CExoArrayListTemplatedCNWSObjectPtr"

    def test_reference_argument(self):
        assert mangle_template_name("Holder<Foo &>") == "HolderTemplatedFooRef"

    def test_nested_arguments_innermost_first(self):
        assert mangle_template_name("A<B<int>, C>") == "ATemplatedBTemplatedintC"

    def test_spaces_inside_arguments_removed(self):
        assert mangle_template_name("CExoArrayList<unsigned long>") == "CExoArrayListTemplatedunsignedlong"

    def test_plain_name_unchanged(self):
        assert mangle_template_name("CNWSCreature") == "CNWSCreature"

    def test_preprocess_marks_spaces_only_inside_brackets(self):
        assert preprocess_template("const A<unsigned int> *") == "const A<unsigned^int> *"

    @pytest.mark.parametrize("name", [
        "CExoArrayList<CNWSObject *>",
        "A<B<int>, C>",
        "CExoLinkedList<CExoArrayList<unsigned long>>",
        "operator<",
    ])
    def test_mangling_is_idempotent(self, name):
        once = mangle_template_name(name)
        assert mangle_template_name(once) == once


class TestStripTemplateSuffix:
    def test_templated_name(self):
        assert strip_template_suffix("CExoArrayListTemplatedint") == "CExoArrayList"

    def test_plain_name(self):
        assert strip_template_suffix("CNWSCreature") == "CNWSCreature"


class TestTopLevelSpans:
    def test_text_outside_brackets_untouched(self):
        line = "unsigned int, CExoArrayList<unsigned int>"
        assert preprocess_template(line) == "unsigned int, CExoArrayList<unsigned^int>"
        assert mangle_template_name(line) == "unsigned int, CExoArrayListTemplatedunsignedint"

    def test_repeated_argument_lists_mangled_in_place(self):
        assert mangle_template_name("A<int> B<A<int>>") == "ATemplatedint BTemplatedATemplatedint"

    def test_split_ignores_commas_inside_brackets(self):
        assert split_top_level("int, std::map<int, float>, char *") == ["int", "std::map<int, float>", "char *"]
        assert split_top_level("") == []
