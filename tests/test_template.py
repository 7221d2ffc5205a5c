from on_this_day.models import EventRecord
from on_this_day.output.template import render, render_item, render_title

ITEM = "* {{description}} {{if year}}({{year}}){{endif}}\n"


def test_empty_events_render_nothing(today):
    assert render([], 3, "# {{currentdate}}\n", ITEM, "MMMM Do", today=today) == ""


def test_empty_item_template_renders_nothing(sample_events, today):
    assert render(sample_events, 3, "# {{currentdate}}\n", "", "MMMM Do", today=today) == ""


def test_year_block_removed_when_year_unknown():
    assert render_item(ITEM, EventRecord(description="Example", year=0)) == "* Example \n"
    assert render_item(ITEM, EventRecord(description="Example")) == "* Example \n"


def test_year_block_unwrapped_when_year_known():
    assert render_item(ITEM, EventRecord(description="Example", year=1990)) == "* Example (1990)\n"


def test_legacy_token_names():
    template = "* {{eventdescription}} {{if eventyear}}({{eventyear}}){{endif}}\n"
    assert render_item(template, EventRecord(description="Example", year=1990)) == "* Example (1990)\n"
    assert render_item(template, EventRecord(description="Example")) == "* Example \n"


def test_category_block_and_unknown_tokens():
    template = "- {{description}}{{if category}} [{{category}}]{{endif}} {{mystery}}\n"
    assert render_item(template, EventRecord(description="A", category="birth")) == "- A [birth] {{mystery}}\n"
    assert render_item(template, EventRecord(description="A")) == "- A {{mystery}}\n"


def test_substituted_values_are_not_rescanned():
    event = EventRecord(description="Uses {{year}} literally", year=1990)
    assert render_item("{{description}} / {{year}}", event) == "Uses {{year}} literally / 1990"


def test_multiline_conditional_block():
    template = "{{description}}{{if year}}\n  year: {{year}}\n{{endif}}|"
    assert render_item(template, EventRecord(description="A", year=5)) == "A\n  year: 5\n|"
    assert render_item(template, EventRecord(description="A")) == "A|"


def test_takes_first_count_in_order(sample_events, today):
    text = render(sample_events, 2, "", "{{description}};", "MMMM Do", today=today)
    assert text == "The first event;A second event;"

    changed = sample_events[:2] + [EventRecord(description="Something else entirely")]
    assert render(changed, 2, "", "{{description}};", "MMMM Do", today=today) == text


def test_title_then_items(sample_events, today):
    text = render(sample_events, 1, "## On this day ({{currentdate}})\n\n", ITEM, "MMMM Do", today=today)
    assert text == "## On this day (October 18th)\n\n* The first event (1867)\n"


def test_title_can_be_left_out(sample_events, today):
    text = render(sample_events, 1, "## {{currentdate}}\n", ITEM, "MMMM Do", include_title=False, today=today)
    assert text == "* The first event (1867)\n"


def test_title_date_substituted_in_one_pass(today):
    # the formatted date itself contains the token; it must not be expanded again
    title = render_title("{{currentdate}} and {{currentdate}}", "[{{currentdate}}] D", today=today)
    assert title == "{{currentdate}} 18 and {{currentdate}} 18"


def test_count_larger_than_events(sample_events, today):
    text = render(sample_events, 10, "", "{{description}}\n", "MMMM Do", today=today)
    assert text.count("\n") == len(sample_events)
