import pytest

from prompts import get_prompt_path, load_prompt, reload_prompts


def test_prompt_files_exist():
    assert get_prompt_path("priority_analysis/system_prompt").exists()
    assert get_prompt_path("priority_analysis/user_prompt").exists()


def test_frontmatter_is_stripped_from_rendered_prompt():
    prompt = load_prompt("priority_analysis/system_prompt")

    assert not prompt.startswith("---")
    assert prompt.startswith("You are a political analyst expert")
    assert '"confidenceScores"' in prompt


def test_user_prompt_renders_variables():
    prompt = load_prompt("priority_analysis/user_prompt", priorities_json='["Fix the roads"]')

    assert prompt == 'Analyze these voter priorities: ["Fix the roads"]'


def test_missing_required_variable_raises():
    with pytest.raises(ValueError, match="priorities_json"):
        load_prompt("priority_analysis/user_prompt")


def test_unknown_prompt_raises():
    reload_prompts()
    with pytest.raises(FileNotFoundError):
        load_prompt("priority_analysis/does_not_exist")
