detailed_summary_template = """Your task is to create a comprehensive summary of a piece of content. Do not use words like "video" or "speaker".
    GUIDELINES:
    - Preserve all key details and conclusions.
    - Use markdown formatting.
    - Output a valid JSON object with ONE key: "summary". The value is the markdown text.
    Content to analyze: ---
    {content}
    ---"""

chunk_summary_template = """Summarize ONLY the provided content chunk. Do not refer to the source as "the video". Use markdown bullet points.
    Context: {context}
    Content Chunk: ---
    {chunk}
    ---"""

image_queries_template = """
    Based on the following summary, generate up to {max_queries} concise and effective Google Image Search queries that would find relevant, high-quality images to illustrate the key topics.
    GUIDELINES:
    1. Queries should be simple and direct.
    2. Respond with a valid JSON object with a single key "queries" containing an array of strings.
    3. If the summary is too generic, return an empty array for the "queries" key.
    SUMMARY:
    ---
    {summary}
    ---
    """

ENTIRE_CONTENT = "This is the entire content."
BEGINNING_CONTENT = "This is the BEGINNING of the content."
FINAL_CONTENT = "This is the FINAL part of the content."
MIDDLE_CONTENT = "This is a middle part of the content. Summarize it concisely."


def chunk_context(is_first: bool, is_last: bool) -> str:
    """Describe where a chunk sits within the whole transcript."""
    if is_first and is_last:
        return ENTIRE_CONTENT
    if is_first:
        return BEGINNING_CONTENT
    if is_last:
        return FINAL_CONTENT
    return MIDDLE_CONTENT
