"""Prompt templates for the prompt operations."""

# ruff: noqa: E501
# Prompt templates contain long lines by design

STRUCTURE_PROMPT = """You are an AI expert in parsing natural language prompts into structured JSON format.

Your goal is to convert the given prompt into a valid JSON structure and to identify any potential biases in the prompt.

Prompt: {prompt}

Output the JSON (as a string in structured_json) and a bias detection report. If no bias is detected, bias_report should be null.
"""

ENHANCE_PROMPT = """You are a prompt engineering expert. Your goal is to help users improve their prompts to get better-structured JSON outputs.

Analyze the user's original prompt and the resulting JSON output. Based on this, rewrite the user's prompt to be clearer, more specific, and better structured for a large language model.

Do not just list suggestions. Provide a single, complete, rewritten prompt that incorporates your improvements, and briefly explain your reasoning.

Original Prompt: {prompt}
Generated JSON: {json_output}
"""

TITLE_PROMPT = """You are an expert at creating concise summaries. Analyze the following prompt and generate a short, descriptive title for it. The title should be between 3 and 6 words.

Prompt: {prompt}
"""

# Safety thresholds applied to the Structure operation
STRUCTURE_SAFETY_SETTINGS = [
    {"category": "HARM_CATEGORY_HATE_SPEECH", "threshold": "BLOCK_ONLY_HIGH"},
    {"category": "HARM_CATEGORY_DANGEROUS_CONTENT", "threshold": "BLOCK_NONE"},
    {"category": "HARM_CATEGORY_HARASSMENT", "threshold": "BLOCK_MEDIUM_AND_ABOVE"},
    {"category": "HARM_CATEGORY_SEXUALLY_EXPLICIT", "threshold": "BLOCK_LOW_AND_ABOVE"},
]

# Generic wrapper messages, one per operation
STRUCTURE_FAILED_MESSAGE = "Failed to parse prompt. Please try again."
ENHANCE_FAILED_MESSAGE = "Failed to suggest enhancements. Please try again."
TITLE_FAILED_MESSAGE = "Failed to generate title. Please try again."
