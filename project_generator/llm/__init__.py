"""
Hosted language model clients.
"""

from project_generator.llm.claude_client import ClaudeClient, extract_json_text, parse_json_response

__all__ = [
    "ClaudeClient",
    "extract_json_text",
    "parse_json_response",
]
