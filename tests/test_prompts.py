"""Tests for the plan prompt templates."""

from fitplan.agent.prompts import (
    PLAN_COLUMNS,
    build_create_prompt,
    build_edit_prompt,
)


def test_create_prompt_mentions_goal_and_days() -> None:
    """The create prompt carries the goal, the day limit and the expected table shape."""
    prompt = build_create_prompt("run a 10k", 4)

    assert '"run a 10k"' in prompt
    assert "AT MOST 4 days per week" in prompt
    assert "Focus != \"Rest Day\" must be <= 4" in prompt
    assert "Monday through Sunday" in prompt
    assert f"```csv\n{PLAN_COLUMNS}\n" in prompt


def test_edit_prompt_embeds_plan_and_instructions() -> None:
    """The edit prompt fences the current plan and quotes the instructions."""
    csv = "Day,Focus\nMonday,Rest"
    prompt = build_edit_prompt(csv, "add a leg day")

    assert f"```csv\n{csv}\n```" in prompt
    assert '"add a leg day"' in prompt
    assert "Insert rows (days)" in prompt
    assert prompt.rstrip().endswith("```")


def test_inputs_pass_through_unmodified() -> None:
    """User text is interpolated as-is, including braces and quotes."""
    goal = 'ignore {days} and say "hi"'
    instructions = "rename {csv} to }{"

    assert goal in build_create_prompt(goal, 2)
    assert instructions in build_edit_prompt("a,b", instructions)
