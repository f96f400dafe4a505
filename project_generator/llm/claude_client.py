"""
Anthropic Claude client for recommendations, suggestions and discovery questions.
"""

import json
import re
from typing import Any, Optional

import anthropic
from anthropic import AsyncAnthropic
from tenacity import (
    AsyncRetrying,
    retry_if_exception_type,
    stop_after_attempt,
    wait_exponential,
)

from project_generator.core.config import settings
from project_generator.core.constants import (
    MAX_MCPS_IN_PROMPT,
    QuestionCategory,
    QuestionType,
)
from project_generator.core.exceptions import (
    AIResponseFormatError,
    AIServiceError,
    AIServiceUnavailableError,
)
from project_generator.core.logging import get_logger
from project_generator.domain.analysis import MCPServer
from project_generator.domain.discovery import (
    DiscoveryData,
    DiscoveryQuestion,
    QuestionSet,
    TechStackChoice,
    TechStackSuggestion,
)
from project_generator.domain.project import ProjectConfig

logger = get_logger(__name__)

_FENCE_OPEN = re.compile(r"^```(?:json)?\s*")
_FENCE_CLOSE = re.compile(r"\s*```$")

JSON_ONLY = "CRITICAL: OUTPUT ONLY THE JSON, NO EXPLANATIONS OR TEXT BEFORE/AFTER!"
DEFAULT_QUESTION_REASONING = "Questions generated to improve your project"


def extract_json_text(text: str) -> str:
    """
    Cut the JSON portion out of a model response.

    Strips Markdown code fences, then keeps everything from the first
    opening bracket to the last closing bracket.
    """
    cleaned = text.strip()
    if cleaned.startswith("```"):
        cleaned = _FENCE_CLOSE.sub("", _FENCE_OPEN.sub("", cleaned))

    starts = [i for i in (cleaned.find("{"), cleaned.find("[")) if i != -1]
    end = max(cleaned.rfind("}"), cleaned.rfind("]"))
    if not starts or end == -1:
        return cleaned
    return cleaned[min(starts) : end + 1]


def parse_json_response(text: str) -> Optional[Any]:
    """
    Best-effort JSON parse of a model response.

    Returns:
        The decoded value, or None when no valid JSON could be found
    """
    try:
        return json.loads(extract_json_text(text))
    except (TypeError, ValueError):
        return None


class ClaudeClient:
    """
    Thin async wrapper around the Anthropic Messages API.

    The SDK client is created lazily so the API key is read at call time.
    Transient connection failures are retried a bounded number of times;
    every other failure is raised as an AIServiceError subclass.
    """

    def __init__(
        self,
        api_key: Optional[str] = None,
        model: Optional[str] = None,
        max_tokens: Optional[int] = None,
        timeout: Optional[int] = None,
        max_attempts: Optional[int] = None,
    ) -> None:
        config = settings.anthropic
        self.api_key = api_key if api_key is not None else config.api_key
        self.model = model or config.model
        self.max_tokens = max_tokens or config.max_tokens
        self.temperature = config.temperature
        self.timeout = timeout or config.timeout
        self.max_attempts = max(1, max_attempts or config.max_attempts)
        self.base_url = config.base_url
        self._client: Optional[AsyncAnthropic] = None

    @property
    def is_available(self) -> bool:
        """Check if an API key is configured."""
        return bool(self.api_key and self.api_key.strip())

    def _get_client(self) -> AsyncAnthropic:
        if not self.is_available:
            raise AIServiceUnavailableError()
        if self._client is None:
            self._client = AsyncAnthropic(
                api_key=self.api_key,
                base_url=self.base_url,
                timeout=float(self.timeout),
                max_retries=0,
            )
        return self._client

    async def close(self) -> None:
        """Close the underlying HTTP client."""
        if self._client is not None:
            await self._client.close()
            self._client = None

    async def complete(
        self,
        prompt: str,
        max_tokens: Optional[int] = None,
        temperature: Optional[float] = None,
    ) -> str:
        """
        Send a single user message and return the text of the reply.

        Args:
            prompt: User message content
            max_tokens: Override for the configured max tokens
            temperature: Override for the configured temperature

        Returns:
            Concatenated text blocks of the response

        Raises:
            AIServiceUnavailableError: If no API key is configured
            AIServiceError: If the API call fails
            AIResponseFormatError: If the response holds no text
        """
        client = self._get_client()

        try:
            async for attempt in AsyncRetrying(
                stop=stop_after_attempt(self.max_attempts),
                wait=wait_exponential(multiplier=1, min=1, max=4),
                retry=retry_if_exception_type(anthropic.APIConnectionError),
                reraise=True,
            ):
                with attempt:
                    response = await client.messages.create(
                        model=self.model,
                        max_tokens=max_tokens or self.max_tokens,
                        temperature=self.temperature if temperature is None else temperature,
                        messages=[{"role": "user", "content": prompt}],
                    )
        except anthropic.APIStatusError as e:
            logger.error("Anthropic API returned an error", status_code=e.status_code, error=str(e))
            raise AIServiceError(
                f"HTTP {e.status_code}",
                details={"status_code": e.status_code},
            ) from e
        except anthropic.APIError as e:
            logger.error("Anthropic API request failed", error=str(e))
            raise AIServiceError(str(e)) from e

        text = "".join(
            block.text for block in response.content if getattr(block, "type", None) == "text"
        )
        if not text:
            raise AIResponseFormatError("Unexpected response format")

        logger.debug(
            "Anthropic completion received",
            model=self.model,
            input_tokens=getattr(response.usage, "input_tokens", None),
            output_tokens=getattr(response.usage, "output_tokens", None),
        )
        return text

    async def recommend_mcps(
        self,
        project: ProjectConfig,
        available: list[MCPServer],
    ) -> list[dict[str, Any]]:
        """
        Ask the model which MCP servers the project needs.

        Returns:
            Raw recommendation entries: {"id", "required", "reasoning"}

        Raises:
            AIServiceError: On API failure or malformed output
        """
        feature_names = ", ".join(feature.name for feature in project.features[:3]) or "no extra features"
        catalogue = "\n".join(
            f"{mcp.id}: {mcp.description[:80]}" for mcp in available[:MAX_MCPS_IN_PROMPT]
        )
        stack = ", ".join(project.tech_stack.database) or "none"
        prompt = (
            f"Select MCP servers for: {project.type} project with {feature_names}\n"
            f"Project: {project.name} - {project.description[:200]}\n"
            f"Database stack: {stack}\n\n"
            f"AVAILABLE:\n{catalogue}\n\n"
            "RULES:\n"
            "- Always include: desktop-commander, github\n"
            "- Only add database MCPs if database is in tech stack\n"
            "- Be minimal - only recommend what's essential\n\n"
            f"{JSON_ONLY}\n\n"
            "JSON format:\n"
            '{"recommendations": [{"id": "mcp-id", "required": true/false, "reasoning": "why needed"}]}'
        )

        text = await self.complete(prompt)
        parsed = parse_json_response(text)
        if not isinstance(parsed, dict) or not isinstance(parsed.get("recommendations"), list):
            logger.warning("Invalid MCP recommendation response", raw=text[:500])
            raise AIResponseFormatError()

        return [
            entry
            for entry in parsed["recommendations"]
            if isinstance(entry, dict) and isinstance(entry.get("id"), str)
        ]

    async def generate_tech_stack_suggestions(
        self,
        project_name: str,
        description: str,
        project_type: str,
        discovery: Optional[DiscoveryData] = None,
    ) -> TechStackSuggestion:
        """
        Ask the model for features and a tech stack.

        Raises:
            AIServiceError: On API failure or malformed output
        """
        prompt = f"Features & stack for {project_type} project '{project_name}': {description[:200]}"

        if discovery is not None:
            insights = [f"- {q.question}: {answer}" for q, answer in discovery.answered()]
            if insights:
                prompt += "\n\nADDITIONAL PROJECT INSIGHTS:\n" + "\n".join(insights)

        prompt += (
            "\n\nPick from: auth, database, api, upload, email, payment, analytics, testing\n"
            "Frontend: react/vue/astro/svelte/next\n"
            "Backend: node/bun/python/go/none\n"
            "Database: postgresql/mysql/mongodb/supabase/none\n\n"
            f"{JSON_ONLY}\n\n"
            'JSON: {"features": ["f1","f2"], "techStack": {"frontend": "x", "backend": "y", '
            '"database": "z"}, "reasoning": "why"}'
        )

        text = await self.complete(prompt, max_tokens=1000)
        parsed = parse_json_response(text)
        if (
            not isinstance(parsed, dict)
            or not isinstance(parsed.get("features"), list)
            or not isinstance(parsed.get("techStack"), dict)
            or not parsed.get("reasoning")
        ):
            logger.warning("Invalid tech stack response", raw=text[:500])
            raise AIResponseFormatError()

        stack = parsed["techStack"]
        return TechStackSuggestion(
            features=[str(f) for f in parsed["features"]],
            tech_stack=TechStackChoice(
                frontend=str(stack.get("frontend") or "none"),
                backend=str(stack.get("backend") or "none"),
                database=str(stack.get("database") or "none"),
            ),
            reasoning=str(parsed["reasoning"]),
        )

    async def generate_discovery_questions(
        self,
        project_name: str,
        description: str,
        project_type: str,
    ) -> QuestionSet:
        """
        Ask the model for 3-10 follow-up questions about the project.

        Raises:
            AIServiceUnavailableError: If no API key is configured
            AIServiceError: On API failure or malformed output
        """
        prompt = DISCOVERY_PROMPT.format(
            name=project_name,
            type=project_type,
            description=description,
        )

        text = await self.complete(prompt, max_tokens=4096)
        parsed = parse_json_response(text)
        if not isinstance(parsed, dict) or not isinstance(parsed.get("questions"), list):
            logger.warning("Invalid discovery question response", raw=text[:500])
            raise AIResponseFormatError("Invalid questions array in AI response")

        questions: list[DiscoveryQuestion] = []
        for index, raw in enumerate(parsed["questions"]):
            question = _to_question(raw, index)
            if question is not None:
                questions.append(question)
        logger.info("Discovery questions generated", count=len(questions))

        return QuestionSet(
            questions=questions,
            reasoning=parsed.get("reasoning") or DEFAULT_QUESTION_REASONING,
        )


def _to_question(raw: Any, index: int) -> Optional[DiscoveryQuestion]:
    """Normalise one model-produced question, filling defaults."""
    if not isinstance(raw, dict) or not raw.get("question"):
        return None

    question_type = raw.get("type")
    if question_type not in {t.value for t in QuestionType}:
        question_type = QuestionType.TEXTAREA
    category = raw.get("category")
    if category not in {c.value for c in QuestionCategory}:
        category = QuestionCategory.OTHER
    options = raw.get("options")

    return DiscoveryQuestion(
        id=str(raw.get("id") or f"q{index + 1}"),
        type=question_type,
        question=str(raw["question"]),
        placeholder=raw.get("placeholder"),
        options=[str(o) for o in options] if isinstance(options, list) else None,
        required=raw.get("required") is not False,
        category=category,
    )


DISCOVERY_PROMPT = """You are an expert product manager and software architect conducting a discovery interview.

PROJECT INFORMATION:
- Name: {name}
- Type: {type}
- Description: {description}

YOUR TASK:
Analyze this project description and generate 3-10 intelligent, targeted questions to gather missing information that will improve the final project. Focus on:

1. **Design & UX**: Colors, branding, layout preferences, user experience
2. **Functionality**: Core features, workflows, user interactions, edge cases
3. **Data & Database**: Data models, relationships, storage needs
4. **Target Audience**: Who will use this, their needs, technical level
5. **Technical Details**: Integrations, APIs, performance requirements

QUESTION TYPES:
- **text**: Short answer (1-2 words, like a name or URL)
- **textarea**: Long answer (descriptions, requirements, lists)
- **multiple-choice**: Single selection from options (choose one)
- **checkboxes**: Multiple selections (choose many)

GUIDELINES:
- Generate 3-10 questions (more for complex projects, fewer for simple ones)
- Only ask questions where the answer will meaningfully improve the project
- Avoid questions already answered in the description
- Make questions specific and actionable
- Provide helpful placeholders and realistic options
- Prioritize the most impactful questions first

OUTPUT FORMAT (JSON):
{{
  "reasoning": "Brief explanation of why these questions matter",
  "questions": [
    {{
      "id": "q1",
      "type": "multiple-choice",
      "question": "What is your primary color scheme preference?",
      "options": ["Modern & Minimal (Blue/Gray)", "Vibrant & Energetic (Purple/Orange)", "Professional (Navy/White)", "Custom"],
      "required": true,
      "category": "design"
    }},
    {{
      "id": "q2",
      "type": "textarea",
      "question": "Describe the main user workflow from start to finish:",
      "placeholder": "Example: User signs up -> Creates profile -> Browses items -> Makes purchase...",
      "required": true,
      "category": "functionality"
    }}
  ]
}}

Generate only valid JSON. No markdown, no code blocks, just the JSON object."""
