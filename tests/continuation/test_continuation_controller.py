# tests/continuation/test_continuation_controller.py
from continuation.controllers.continuation_controller import ContinuationController

STYLE = "<style>" + "section { padding: 2rem; }\n" * 30 + "</style>"
HEAD = "<!DOCTYPE html><html lang='en'><head><title>Jane Doe</title>" + STYLE + "</head>"
PARTIAL = HEAD + "<body><main><h1>Jane Doe</h1><section><h2>Projects</h2><p>Harbor is a booking to"
COMPLETE = HEAD + "<body><main><h1>Jane Doe</h1></main></body></html>"
BARE_PARTIAL = "<html><body><main><h1>Jane Doe</h1><section><p>" + "Harbor is a booking tool. " * 30
PORTFOLIO = {"personalInfo": {"name": "Jane Doe"}, "projects": [{"title": "Harbor"}]}


class RecordingGenerator:
    """Nep-generator die vaste antwoorden teruggeeft en de prompts bewaart."""

    def __init__(self, *responses):
        self.responses = list(responses)
        self.prompts = []

    def __call__(self, prompt):
        self.prompts.append(prompt)
        response = self.responses.pop(0)
        if isinstance(response, Exception):
            raise response
        return response


def test_complete_artifact_needs_no_generation():
    generate = RecordingGenerator()
    result = ContinuationController(generate, max_attempts=2).continue_generation(COMPLETE, PORTFOLIO)

    assert result.success
    assert result.attempts == 0
    assert result.html == COMPLETE
    assert generate.prompts == []


def test_truncated_artifact_is_completed():
    generate = RecordingGenerator("```html\nol for marinas.</p></section></main></body></html>\n```")
    result = ContinuationController(generate, max_attempts=2).continue_generation(PARTIAL, PORTFOLIO)

    assert result.success
    assert result.attempts == 1
    assert result.completeness.is_complete
    assert "booking tool for marinas." in result.html
    assert result.html.count("</html>") == 1
    assert PARTIAL in generate.prompts[0]


def test_stops_after_max_attempts():
    """Zonder head, doctype en CSS blijft het artefact onvolledig, ook met sluit-tags."""
    generate = RecordingGenerator("ol", " for", " marinas")
    result = ContinuationController(generate, max_attempts=2).continue_generation(BARE_PARTIAL, PORTFOLIO)

    assert result.success is False
    assert result.attempts == 2
    assert result.error == "Max attempts reached"
    assert len(generate.prompts) == 2
    assert generate.responses == [" marinas"]


def test_generator_failure_uses_an_attempt():
    generate = RecordingGenerator(RuntimeError("rate limited"), "ol for marinas.</p></section></main></body></html>")
    result = ContinuationController(generate, max_attempts=2).continue_generation(PARTIAL, PORTFOLIO)

    assert result.success
    assert result.attempts == 2


def test_unrecoverable_artifact_needs_regeneration():
    generate = RecordingGenerator()
    result = ContinuationController(generate, max_attempts=2).continue_generation("<div>Jane", PORTFOLIO)

    assert result.success is False
    assert result.needs_regeneration is True
    assert result.attempts == 0
    assert generate.prompts == []


def test_max_attempts_defaults_to_config():
    controller = ContinuationController(RecordingGenerator())
    assert controller.max_attempts == 2
