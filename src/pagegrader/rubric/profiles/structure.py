import re
from typing import Optional

from ..core import GradingContext, RubricDefinition, ScoreResult, rubric_check, rubric_warning

STRUCTURE_TAGS = ['h1', 'h2', 'h3', 'h4', 'h5', 'h6', 'p', 'ul', 'ol', 'li']
COMMENT_RE = re.compile(r'<!--[\s\S]*?-->')
MIN_BODY_TEXT = 50


# --- RULES ---

@rubric_check("Structure", 3)
def check_structure(ctx: GradingContext) -> ScoreResult:
    used = [tag for tag in STRUCTURE_TAGS if ctx.doc.count_by_tag(tag) > 0]
    if len(used) >= 3:
        return 3, f"Great job! You used {len(used)} different types of tags."
    return 0, f"You only used {len(used)} tag types. Try adding lists or headers!"


@rubric_check("Code Hygiene", 3)
def check_comments(ctx: GradingContext) -> ScoreResult:
    if COMMENT_RE.search(ctx.html):
        return 3, "Comments found! Good job documenting your sections."
    return 0, "No comments found. Use <!-- Comment --> to label sections."


@rubric_check("Content", 3)
def check_content(ctx: GradingContext) -> ScoreResult:
    doc = ctx.doc
    has_paragraphs = doc.count_by_tag('p') >= 1
    has_list = doc.count_by_tag('ul') > 0 or doc.count_by_tag('ol') > 0
    has_list_items = doc.count_by_tag('li') > 0

    if has_paragraphs and has_list and has_list_items:
        return 3, "Page content looks substantial (Bio + List)."

    missing = []
    if not has_paragraphs:
        missing.append('Paragraphs')
    if not has_list:
        missing.append('A List (ul or ol)')
    elif not has_list_items:
        missing.append('List items (li)')
    return 0, f"Page is feeling thin. Missing: {', '.join(missing)}"


@rubric_check("Syntax Check", 3)
def check_rendered_text(ctx: GradingContext) -> ScoreResult:
    # A forgiving parser hides unclosed tags; an almost empty body is the symptom.
    if len(ctx.doc.body_text()) > MIN_BODY_TEXT:
        return 3, "Content is rendering text to the screen."
    return 0, "Your page seems empty. Check for unclosed tags!"


# --- WARNINGS ---

@rubric_warning("Hierarchy")
def warn_heading_hierarchy(ctx: GradingContext) -> Optional[str]:
    h1_count = ctx.doc.count_by_tag('h1')
    if h1_count > 1:
        return "You generally only want ONE H1 tag per page."
    if h1_count == 0:
        return "Missing an <h1> tag for your main title."
    return None


# --- DEFINITION ---
DEFINITION = RubricDefinition(
    name="structure",
    title="🤖 Auto-Grader Report for HTML Fan Page",
    checks=[check_structure, check_comments, check_content, check_rendered_text],
    warnings=[warn_heading_hierarchy],
    pass_threshold=8,
    checklist=[
        "Structure: At least 3 different tag types (headings, paragraphs, lists)",
        "Hierarchy: Exactly one <h1> for the main title",
        "Code Hygiene: Sections labelled with <!-- comments -->",
        "Content: Paragraphs plus a list with list items",
        "Syntax: Tags closed so the text renders to the screen",
    ],
    console_style="ansi",
)
