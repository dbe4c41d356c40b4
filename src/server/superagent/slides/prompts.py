SLIDE_SCHEMA_INSTRUCTIONS = """
Return ONLY a JSON object with this exact structure:
{
  "slides": [
    {
      "title": "string",
      "content": "string (use an empty string when the slide only has bullet points)",
      "type": "title" | "content" | "bullet",
      "bulletPoints": ["string", "..."]
    }
  ]
}
`bulletPoints` is required (at least one item) for "bullet" slides and omitted otherwise. Do not add any other keys or any text outside the JSON object.
"""

SLIDES_FROM_TOPIC_PROMPT = """Create a professional presentation with exactly {slide_count} slides about "{topic}" using a {style} style.

CRITICAL CONTENT RULES:
- NEVER use placeholder text like "heading", "content", "bullet point", "Lorem ipsum", etc.
- ALWAYS write actual, meaningful, specific content about "{topic}".
- Each slide must carry substantive, valuable information that is specific to the topic.

SLIDE STRUCTURE:
- Slide 1: Title slide with a compelling title and a descriptive subtitle.
{body_structure}
SLIDE TYPES:
- Use "title" type for the first slide only.
- Use "bullet" for slides with multiple key points (3-5 bullets max).
- Use "content" for slides with detailed explanations.
- Alternate between "bullet" and "content" slides as the material requires.
{schema}"""

SLIDES_FROM_CONTENT_PROMPT = """You will be given text that describes the content for a presentation, structured slide by slide. Your task is to convert this structured text into a valid JSON object that matches the slide schema. Use the provided text to populate the 'title', 'content', and 'bulletPoints' for each slide. Determine the best 'type' for each slide ('title', 'content', or 'bullet') based on the provided structure.
{count_hint}
CRITICAL CONTENT RULES:
- Base the presentation ENTIRELY on the provided content. Do not add outside information or invent facts.
- NEVER use placeholder text like "heading", "content", "bullet point", etc.

Here is the structured content:
---
{content}
---
{schema}"""

SLIDE_COUNT_HINT = "Aim for {slide_count} slides unless the structured content clearly defines a different number of slides.\n"

# Structure lines after the title slide, picked by slide count
CONTENT_SLIDE_LINE = "- Slide 2: Content slide with specific information, insights, or analysis.\n"
CONTENT_SLIDES_LINE = "- Slides 2-{last_content_slide}: Content slides with specific information, insights, or analysis.\n"
CONCLUSION_SLIDE_LINE = "- Slide {slide_count}: Strong conclusion with key takeaways and next steps.\n"
