"""Prompt templates for locating a chunk inside its source document."""

from __future__ import annotations

SYSTEM_PROMPT = """You help clinicians find where a quoted passage appears in a guideline PDF.
Reply with a single JSON object and nothing else."""


def build_page_prompt(chunk_text: str, document_name: str) -> str:
    return f"""I have a PDF document called "{document_name}" which is a WHO guide on managing diarrhoea and pneumonia in children.
I found this text chunk from it and need to know which page it is likely from and which phrase to search for when highlighting:

\"\"\"
{chunk_text.strip()}
\"\"\"

Return only a JSON object with:
1. "page": your best page number estimate (an integer between 1 and 80)
2. "highlightText": a short, distinct phrase (5-10 words) copied from the chunk

Format: {{"page": number, "highlightText": "phrase for highlighting"}}"""
