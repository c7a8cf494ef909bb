from models.color import Color
from models.timer_config import TimerConfig
from services.prompt_export_service import (
    PLUGIN_ID, PLUGIN_NAME, build_plugin_prompt, color_to_gl_literal
)


def test_gl_literal_format():
    assert color_to_gl_literal(Color.red()) == "{ 1.00f, 0.00f, 0.00f, 1.0f }"
    assert color_to_gl_literal(Color(0, 128, 255)) == "{ 0.00f, 0.50f, 1.00f, 1.0f }"


def test_prompt_embeds_config():
    config = TimerConfig(limit_seconds=90, final_message="GAME OVER", color_30s=Color(0, 0, 0))
    prompt = build_plugin_prompt(config)

    assert f'"{PLUGIN_NAME}"' in prompt
    assert f'"{PLUGIN_ID}"' in prompt
    assert "Count UP from 0 to 90s." in prompt
    assert 'If Limit reached (90s), draw message: "GAME OVER".' in prompt
    assert "< 30s remaining: { 0.00f, 0.00f, 0.00f, 1.0f }" in prompt
    assert "Default: { 1.00f, 1.00f, 1.00f, 1.0f }" in prompt
    assert f"class {PLUGIN_NAME} : public CFFGLPlugin {{" in prompt


def test_prompt_has_fixed_sections():
    prompt = build_plugin_prompt(TimerConfig())
    for section in ("**GOAL:**", "**CONTEXT:**", "**REQUIREMENTS:**", "**PLUGIN LOGIC:**", "**OUTPUT FORMAT:**"):
        assert section in prompt
