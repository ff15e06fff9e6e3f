import logging

from isoblock.core.config import Config
from isoblock.utils.llm import LLMClient, LLMError

logger = logging.getLogger(__name__)

SYSTEM_PROMPT = "You are a code analyzer, skilled in identifying dependencies in code blocks."

ANALYZE_PROMPT = """\
Analyze the following code block and list all the relative paths of dependencies \
(CSS, JS, HTML and image files) required to be ported.
Respond with only the paths in a plain text format, one per line, without any additional \
text, formatting, or explanation.
Do not include any bullet points, dashes, quotes, or other extraneous characters.
The response should only contain valid relative paths that can be directly used in the \
file system.
Including anything more than valid paths will confuse the application.
Here is the code to be analyzed:

{code_block}

Example response:
./assets/css/style.css
./assets/js/main.js
./assets/images/logo.png
../scripts/util.js
../styles/theme.css
"""


class AnalyzerError(Exception):
    pass


class CodeAnalyzer:
    """Asks the model which asset files a code block depends on."""

    def __init__(self, config: Config | None = None, llm_client: LLMClient | None = None) -> None:
        self.config = config or Config()
        self.llm = llm_client or LLMClient(
            model=self.config.llm_model,
            api_key=self.config.llm_api_key,
            temperature=self.config.llm_temperature,
            max_tokens=self.config.llm_max_tokens,
            timeout=self.config.llm_timeout,
        )

    def build_messages(self, code_block: str) -> list[dict[str, str]]:
        return [
            {"role": "system", "content": SYSTEM_PROMPT},
            {"role": "user", "content": ANALYZE_PROMPT.format(code_block=code_block)},
        ]

    async def analyze(self, code_block: str) -> str:
        """Return the model's newline-separated list of candidate paths.

        Raises:
            AnalyzerError: If the call fails or the response has no content.
        """
        try:
            response = await self.llm.achat_completion(self.build_messages(code_block))
        except LLMError as e:
            logger.error(f"Dependency analysis failed: {e}")
            raise AnalyzerError(str(e)) from e

        content = response.get("content")
        if not isinstance(content, str):
            raise AnalyzerError("LLM response has no text content")
        return content.strip()
