import re

THINK_BLOCK_PATTERN = re.compile(r'<think>.*?</think>', flags=re.DOTALL)
CODE_FENCE_PATTERN = re.compile(r'^```[a-zA-Z]*\s*\n?(.*?)\n?```$', flags=re.DOTALL)

def clean_llm_output(text: str) -> str:
    """
    Drops reasoning blocks and a wrapping markdown code fence from model output.
    Non-string input yields an empty string.
    """
    if not isinstance(text, str):
        return ""
    stripped = THINK_BLOCK_PATTERN.sub('', text).strip()
    fenced = CODE_FENCE_PATTERN.match(stripped)
    if fenced:
        stripped = fenced.group(1).strip()
    return stripped
