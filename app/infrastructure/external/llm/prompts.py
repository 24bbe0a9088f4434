"""Prompt text for the fuzzy accessory suggestion call."""

SYSTEM_PROMPT = (
    "You are an expert in mobile accessories and their compatibility with "
    "different phone models. Always answer with a single JSON object."
)

_USER_TEMPLATE = """The user has searched for: "{search_term}". No exact matches were found.

Based on the user's search term, suggest potential accessory matches that are similar, and alternative search terms that might yield better results. For example, if the user searched for a phone model and an accessory, you could suggest different variations of the model name or related accessories.

If you cannot find any relevant suggestions, set recommendFollowUp to true.

Return the results in the following JSON format:
{{
  "suggestedMatches": ["match1", "match2", ...],
  "alternativeSearchTerms": ["term1", "term2", ...],
  "recommendFollowUp": true/false
}}"""


def build_user_prompt(search_term: str) -> str:
    return _USER_TEMPLATE.format(search_term=search_term)
