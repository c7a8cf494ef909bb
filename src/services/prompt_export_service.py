"""
Prompt export - turns a TimerConfig snapshot into the code-generation prompt

Only the prompt text is produced here. Sending it to a code-generation
service and handling its response happen outside this application.
"""

from models.color import Color
from models.timer_config import TimerConfig
from utils.logger import get_logger, LogCategory

log = get_logger().for_category(LogCategory.EXPORT)

PLUGIN_NAME = "ProgressiveTimer"
PLUGIN_ID = "MZN1"


def color_to_gl_literal(color: Color) -> str:
    """
    Format a color as a C++ RGBA float initializer

    Example:
        color_to_gl_literal(Color.red())  # "{ 1.00f, 0.00f, 0.00f, 1.0f }"
    """
    r, g, b = color.to_gl()
    return f"{{ {r:.2f}f, {g:.2f}f, {b:.2f}f, 1.0f }}"


def _requirements_section() -> str:
    return (
        "**REQUIREMENTS:**\n"
        "1.  **Single File**: Provide the complete implementation (Class definition + Methods + DLL Exports) in one code block.\n"
        "2.  **SDK Compliance**:\n"
        "    - Include <FFGL.h> and <FFGLLib.h>.\n"
        "    - Use the standard `CFFGLPlugin` base class.\n"
        "    - Implement `DllMain` (Windows) and `plugMain`.\n"
        "3.  **Rendering (Vector)**:\n"
        "    - **DO NOT** use external font libraries (FreeType, etc.).\n"
        "    - Implement a private helper method `DrawDigit(float x, float y, float size, char character)` "
        "using `glBegin(GL_LINES)` to draw numbers 0-9 and letters A-Z (for the message).\n"
        "    - **DO NOT** draw any copyright/version footer text on the texture itself. "
        "The plugin name will handle the branding in the UI.\n"
        "4.  **Cross-Platform**:\n"
        "    - Use standard OpenGL 2.1 syntax (compatible with Resolume).\n"
        "    - If including Windows headers, wrap them in `#ifdef _WIN32`.\n"
    )


def _plugin_logic_section(config: TimerConfig) -> str:
    return (
        "**PLUGIN LOGIC:**\n"
        f"- **Name**: \"{PLUGIN_NAME}\"\n"
        f"- **ID**: \"{PLUGIN_ID}\"\n"
        f"- **Function**: Count UP from 0 to {config.limit_seconds}s.\n"
        "- **Parameters (Controls)**:\n"
        "  - `Play` (Checkbox/Bool): Default ON. If OFF, pause timer.\n"
        "  - `Reset` (Event/Trigger): If triggered, set time to 0.\n"
        "- **Visuals**:\n"
        "  - Draw the time (MM:SS).\n"
        f"  - If Limit reached ({config.limit_seconds}s), draw message: \"{config.final_message}\".\n"
        "- **Colors**:\n"
        f"  - Default: {color_to_gl_literal(config.color_default)}\n"
        f"  - < 30s remaining: {color_to_gl_literal(config.color_30s)}\n"
        f"  - < 15s remaining: {color_to_gl_literal(config.color_15s)}\n"
        f"  - < 10s remaining: {color_to_gl_literal(config.color_10s)}\n"
        f"  - < 5s remaining: {color_to_gl_literal(config.color_5s)}\n"
    )


def _output_format_section() -> str:
    return (
        "**OUTPUT FORMAT:**\n"
        "Return ONLY the raw C++ code string. No markdown formatting blocks around it, or minimal markdown.\n"
        "\n"
        "```cpp\n"
        "#include <FFGL.h>\n"
        "#include <FFGLLib.h>\n"
        "\n"
        "#ifdef _WIN32\n"
        "#include <windows.h>\n"
        "#endif\n"
        "\n"
        "#include <stdio.h>\n"
        "#include <math.h>\n"
        "#include <string>\n"
        "\n"
        "// Define ID\n"
        f"#define MIZIN_PLUGIN_ID \"{PLUGIN_ID}\"\n"
        "\n"
        f"class {PLUGIN_NAME} : public CFFGLPlugin {{\n"
        "public:\n"
        f"   {PLUGIN_NAME}();\n"
        "   // ... overrides ...\n"
        "private:\n"
        "   // ... helpers ...\n"
        "   void DrawChar(float x, float y, float size, char c);\n"
        "   void DrawString(float x, float y, float size, const char* str);\n"
        "};\n"
        "\n"
        "// ... Implementation ...\n"
        "```\n"
    )


def build_plugin_prompt(config: TimerConfig) -> str:
    """
    Build the FFGL plugin code-generation prompt for a config snapshot

    Args:
        config: Config snapshot to embed (limit, message, band colors)

    Returns:
        Prompt text ready to send to a code-generation service
    """
    prompt = (
        "You are an expert C++ developer specializing in FFGL (FreeFrame GL) plugins for Resolume Arena.\n"
        "\n"
        "**GOAL:** Generate a robust, cross-platform (Windows & macOS) C++ source file for a Timer Plugin.\n"
        "\n"
        "**CONTEXT:**\n"
        "The user is following the official Resolume FFGL SDK \"Quickstart\" guide. "
        "They will paste this code into a file inside an existing SDK project (replacing a sample plugin).\n"
        "\n"
        f"{_requirements_section()}\n"
        f"{_plugin_logic_section(config)}\n"
        f"{_output_format_section()}"
    )

    log.info("Plugin prompt built", limit=config.limit_seconds, length=len(prompt))
    return prompt
