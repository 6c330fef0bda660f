import re
from typing import Optional

from ..core import GradingContext, RubricDefinition, ScoreResult, rubric_check, rubric_warning

ATTRIBUTION_KEYWORDS = ['attribution', 'image by', 'photo by', 'credit', 'source', 'license', 'cc-by', 'public domain']
LICENSE_KEYWORDS = ['cc-by', 'cc-0', 'public domain', 'attribution', 'creative commons', 'cc license']

TEXT_PROPERTIES = [
    'color', 'font-size', 'font-weight', 'font-family', 'font-style', 'text-align', 'line-height', 'letter-spacing'
]
ELEMENT_PROPERTIES = [
    'margin', 'padding', 'background-color', 'background', 'border', 'border-radius', 'width', 'height', 'display',
    'position'
]

# Declared for reference only: the AI warning matches the two phrases below, not these names.
AI_KEYWORDS = ['chatgpt', 'claude', 'copilot', 'artificial intelligence']

CLASS_SELECTOR_RE = re.compile(r'\.[a-zA-Z_][a-zA-Z0-9_-]*')
UNTAGGED_TEXT_RE = re.compile(r'[^<]*[a-zA-Z]')


def _properties_used(css: str, candidates: list) -> list:
    """Candidates that occur anywhere in the stylesheet, as plain substrings."""
    return [prop for prop in candidates if prop in css]


# --- RULES ---

@rubric_check("Images Required", 2)
def check_images(ctx: GradingContext) -> ScoreResult:
    count = ctx.doc.count_by_tag('img')
    if count >= 3:
        return 2, f"Found {count} images."
    if count > 0:
        return 1, f"Only {count} image(s) found. Need 3."
    return 0, "No images found. Need 3."


@rubric_check("Attribution Visible", 2)
def check_attribution(ctx: GradingContext) -> ScoreResult:
    near_images = ctx.doc.parent_text_of('img')
    if any(keyword in near_images for keyword in ATTRIBUTION_KEYWORDS):
        return 2, "Attribution text found near images."
    return 0, "No visible attribution found. Add credit near each image."


@rubric_check("License Information", 2)
def check_license(ctx: GradingContext) -> ScoreResult:
    page_text = ctx.doc.page_text()
    if any(keyword in page_text for keyword in LICENSE_KEYWORDS):
        return 2, "License or Creative Commons info detected."
    return 0, "No license info found. Include CC license or public domain status."


@rubric_check("Image Styling", 2)
def check_image_styling(ctx: GradingContext) -> ScoreResult:
    """
    A classed image only earns full marks when the stylesheet has at least one
    class selector. The selector is not matched against the image's class.
    """
    classed_images = ctx.doc.count_with_attribute('img', 'class')
    class_selectors = len(CLASS_SELECTOR_RE.findall(ctx.css))

    if classed_images >= 1 and class_selectors >= 1:
        return 2, f"{classed_images} image(s) styled with CSS class."
    if classed_images > 0:
        return 1, "Image has class but may not be styled in CSS."
    return 0, "No images styled with CSS classes."


@rubric_check("Text Styling", 2)
def check_text_styling(ctx: GradingContext) -> ScoreResult:
    used = _properties_used(ctx.css, TEXT_PROPERTIES)
    if len(used) >= 2:
        return 2, f"{len(used)} text properties used: {', '.join(used)}."
    if len(used) == 1:
        return 1, f"Only 1 text property used: {used[0]}. Need at least 2."
    return 0, "No text styling properties found in CSS."


@rubric_check("Element Styling", 2)
def check_element_styling(ctx: GradingContext) -> ScoreResult:
    used = _properties_used(ctx.css, ELEMENT_PROPERTIES)
    non_border = [prop for prop in used if 'border' not in prop]

    if len(used) >= 2 and non_border:
        return 2, f"{len(used)} element properties used with variety: {', '.join(used[:3])}."
    if len(used) >= 2:
        return 1, (
            f"{len(used)} element properties found, but may be all borders. "
            "Need variety (background + border, spacing, etc)."
        )
    return 0, f"Only {len(used)} element property used. Need at least 2 different types."


# --- WARNINGS ---

@rubric_warning("Inline Styles Detected")
def warn_inline_styles(ctx: GradingContext) -> Optional[str]:
    if 'style=' in ctx.html:
        return "Found style= attributes on HTML tags. Professional code uses external stylesheets only."
    return None


@rubric_warning("Untagged Text")
def warn_untagged_text(ctx: GradingContext) -> Optional[str]:
    markup = ctx.doc.body_markup()
    if markup and UNTAGGED_TEXT_RE.match(markup.strip()):
        return "Text found directly in body without HTML tags. Wrap text in semantic tags like <p>, <h1>, etc."
    return None


@rubric_warning("No CSS File")
def warn_no_css_file(ctx: GradingContext) -> Optional[str]:
    if not ctx.css_files:
        return "No .css file found. All styling should be in an external stylesheet."
    return None


@rubric_warning("AI Assistance Detected")
def warn_ai_assistance(ctx: GradingContext) -> Optional[str]:
    if 'generated by' in ctx.html.lower() or 'ai-generated' in ctx.css.lower():
        return "Comments mention AI tools. Verify this work is your own understanding."
    return None


# --- DEFINITION ---
DEFINITION = RubricDefinition(
    name="media",
    title="📝 Stage 2 Grading Report: CSS & Media",
    checks=[
        check_images,
        check_attribution,
        check_license,
        check_image_styling,
        check_text_styling,
        check_element_styling,
    ],
    warnings=[warn_inline_styles, warn_untagged_text, warn_no_css_file, warn_ai_assistance],
    pass_threshold=8,
    checklist=[
        "Images: Minimum 3 required, variety recommended",
        "Attribution: Visible near images, credit clearly stated",
        "License: CC license or public domain mentioned",
        "Styling: At least 1 image uses a CSS class",
        "Text Properties: At least 2 different properties (color, font-size, etc.)",
        "Element Properties: At least 2 different types (spacing, background, borders, etc.)",
    ],
)
