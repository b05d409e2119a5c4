"""Prompt templates for creating and editing a weekly workout plan."""

PLAN_COLUMNS = "Day,Focus,Exercise 1,Exercise 2,Exercise 3,Optional Notes"

CREATE_PLAN_PROMPT = """
You are a certified fitness coach. Create a one-week workout plan as a CSV table.

User goal:
"{goal}"

User constraint:
- The user can train on AT MOST {days} days per week.

Rules about days:
- Output rows for a 7-day week: Monday through Sunday.
- You must not have more than {days} training days.
- A training day is any row whose "Focus" is not "Rest Day".
- If you need extra days for recovery, mark them as:
  - Focus = "Rest Day"
  - Exercise 1/2/3 = "Rest"
  - Optional Notes = a short recovery tip.

So in your final table:
- Exactly 7 rows (Monday–Sunday).
- The number of rows with Focus != "Rest Day" must be <= {days}.

Additional requirements:
- Make it safe and realistic.
- Include a mix of strength, mobility, and recovery.
- Tailor intensity to the described goal.

Return only a CSV fenced block like:

```csv
{columns}
Monday,...
...
Sunday,...
```
"""

EDIT_PLAN_PROMPT = """
You are editing an existing weekly workout plan stored as CSV.

Current plan:

```csv
{csv}
```

User edit instructions:
"{instructions}"

Apply only these changes to the plan. You may:
- Delete rows (days)
- Insert rows (days)
- Modify exercises, focus, or notes

Return only the updated plan as a CSV fenced block:

```csv
{columns}
...
```
"""


def build_create_prompt(goal: str, days: int) -> str:
    """Instruction for a fresh Monday-Sunday plan with at most *days* training days."""
    return CREATE_PLAN_PROMPT.format(goal=goal, days=days, columns=PLAN_COLUMNS)


def build_edit_prompt(csv: str, instructions: str) -> str:
    """Instruction to apply *instructions* to *csv* and return the whole updated plan."""
    return EDIT_PLAN_PROMPT.format(csv=csv, instructions=instructions, columns=PLAN_COLUMNS)
