import json

import pytest

from plategenie.core.errors import MalformedResponse
from plategenie.utils.response_parser import (
    check_array_delimiters,
    parse_recipe_response,
    strip_code_fences,
    validate_recipes,
)

SOUP = '[{"name":"Tomato Soup","ingredients":["tomato","salt"],"instructions":"Boil and blend."}]'


def test_strip_is_noop_on_clean_text():
    assert strip_code_fences(SOUP) == SOUP


def test_strip_is_idempotent():
    once = strip_code_fences("```json\n" + SOUP + "\n```")
    assert strip_code_fences(once) == once


@pytest.mark.parametrize(
    "wrapped",
    [
        "```json\n" + SOUP + "\n```",
        "```\n" + SOUP + "\n```",
        "```json" + SOUP,
        SOUP + "\n```",
        "  \n```JSON\n" + SOUP + "\n```  \n",
        "```json\n```json\n" + SOUP + "\n```\n```",
    ],
)
def test_fenced_response_decodes_like_unwrapped(wrapped):
    assert parse_recipe_response(wrapped) == json.loads(SOUP)


def test_fenced_round_trip_yields_one_recipe():
    recipes = parse_recipe_response("```json\n" + SOUP + "\n```")
    assert len(recipes) == 1
    assert recipes[0]["name"] == "Tomato Soup"
    assert recipes[0]["ingredients"] == ["tomato", "salt"]


def test_empty_array_is_success():
    assert parse_recipe_response("```json\n[]\n```") == []


@pytest.mark.parametrize(
    "text",
    [
        "Sure, here are some recipes: " + SOUP,
        SOUP + " Enjoy your meal!",
        "I could not find any recipes.",
        "",
        "   ",
        '{"name": "Soup"}',
        '[{"name": "Soup"}',
    ],
)
def test_non_array_text_is_malformed(text, monkeypatch):
    def fail_decode(*args, **kwargs):
        raise AssertionError("decode should not be attempted")

    monkeypatch.setattr("plategenie.utils.response_parser.json.loads", fail_decode)
    with pytest.raises(MalformedResponse):
        parse_recipe_response(text)


@pytest.mark.parametrize(
    "text",
    [
        "[{name: Soup}]",
        '[{"name": "Soup",}]',
        '[{"name": "Soup"}, {"name": "Stew"]',
        "[this is not json]",
    ],
)
def test_bracketed_invalid_json_is_malformed(text):
    with pytest.raises(MalformedResponse):
        parse_recipe_response(text)


def test_none_response_is_malformed():
    with pytest.raises(MalformedResponse):
        parse_recipe_response(None)


def test_check_array_delimiters_accepts_array():
    check_array_delimiters("[]")
    check_array_delimiters(SOUP)


def test_elements_are_returned_without_schema_checks():
    assert parse_recipe_response('[{"name": "Soup", "ingredients": "tomato"}]') == [
        {"name": "Soup", "ingredients": "tomato"}
    ]


def test_validate_recipes_accepts_optional_fields():
    recipes = validate_recipes(
        [
            {
                "name": "Omelette",
                "ingredients": ["egg"],
                "instructions": "Whisk and fry.",
                "cookingTime": "10 mins",
                "difficulty": "Easy",
                "servings": 1,
            }
        ]
    )
    assert recipes[0].cooking_time == "10 mins"
    assert recipes[0].difficulty == "Easy"
    assert recipes[0].model_dump(by_alias=True)["servings"] == 1


@pytest.mark.parametrize(
    "item",
    [
        {"name": "Soup", "ingredients": "tomato", "instructions": "Boil."},
        {"name": "Soup", "instructions": "Boil."},
        {"name": "", "ingredients": [], "instructions": "Boil."},
        "Tomato Soup",
    ],
)
def test_validate_recipes_rejects_bad_shape(item):
    with pytest.raises(MalformedResponse):
        validate_recipes([item])


@pytest.mark.parametrize(
    "text",
    [
        SOUP + "```Enjoy",
        "```Here you go" + SOUP,
    ],
)
def test_prose_glued_to_fence_is_malformed(text):
    with pytest.raises(MalformedResponse):
        parse_recipe_response(text)


def test_language_tag_on_its_own_line_is_removed():
    assert parse_recipe_response("```javascript\n" + SOUP + "\n```") == json.loads(SOUP)


def test_json_tag_glued_to_array_is_removed():
    assert strip_code_fences("```json" + SOUP + "```") == SOUP
