"""LLM prompts and response schemas for author and quote classification."""
from typing import Any, Dict


AUTHOR_NAME_TOOL: Dict[str, Any] = {
    "name": "classify_author_name",
    "description": "Record whether the text sequence is a human name and its English form.",
    "input_schema": {
        "type": "object",
        "properties": {
            "isHuman": {
                "type": "boolean",
                "description": "Indicates if the text sequence is a real human name."
            },
            "englishName": {
                "type": "string",
                "description": "The English equivalent of the name, or the same name if it is English."
            }
        },
        "required": ["isHuman", "englishName"],
        "additionalProperties": False
    }
}

QUOTE_SCORE_TOOL: Dict[str, Any] = {
    "name": "score_quote",
    "description": "Record the score of the quote and its cleaned text.",
    "input_schema": {
        "type": "object",
        "properties": {
            "score": {
                "type": "integer",
                "minimum": 0,
                "maximum": 100,
                "description": "Correctness and contribution of the quote, from 0 to 100."
            },
            "cleanQuote": {
                "type": "string",
                "description": "The quote without other language variants or unrelated text."
            }
        },
        "required": ["score"],
        "additionalProperties": False
    }
}


AUTHOR_NAME_SYSTEM_PROMPT = """You are a professional international linguist. You aim to decide whether the provided text sequence in different languages is a human name or something else (e.g., an object name or a verb). Record your decision with the classify_author_name tool:
- isHuman: true if the text sequence consists of a real human name.
- englishName: the English equivalent of the name (or the same name, if it was English) when isHuman is true, otherwise an empty string.

<input>
Winston Churchill
</input>
<output>
{"isHuman": true, "englishName": "Winston Churchill"}
</output>

When the input contains a valid name, but it's not in English form:
<input>
Artur Şopenhauer
</input>
<output>
{"isHuman": true, "englishName": "Arthur Schopenhauer"}
</output>

When the input doesn't contain a human name:
<input>
Animal farm
</input>
<output>
{"isHuman": false, "englishName": ""}
</output>"""


QUOTE_SCORE_SYSTEM_PROMPT = """You are an international expert focused on quotes. You will get quotes in different languages and aim to score their correctness and contribution to society using a single integer from 0 to 100. Measure the contribution according to the quote's popularity (or the popularity of its variants in other languages), and penalize very long quotes, as people often skip reading them for their complexity.

Record the result with the score_quote tool:
- score: the score you gave to the quote.
- cleanQuote: the quote cleaned of other variants of the quote (in different languages) and any other text not belonging to the quote, if the score isn't zero.

A standard input:
<input>
Oscar Wilde: "Be yourself; everyone else is already taken."
</input>
<output>
{"score": 95, "cleanQuote": "Be yourself; everyone else is already taken."}
</output>

Sometimes the input is structured as a quote (Author name: "Some text here"), but the text isn't an utterance of that person. It may be descriptive or reference text, or a citation of where the quote was published. The input was wrongly classified as a quote, so return 0:
<input>
Dante Alighieri: "Libri iii, Caput XIII, (XV.) emendati Johann Heinrich F. Karl Witte (1874) p. 25. Translation as quoted by Hannah Arendt, The Human Condition (1958), p. 175."
</input>
<output>
{"score": 0}
</output>

Also return 0 when the text is clearly attributed to someone other than the stated author.

When the quote contains other language variants or text that does not belong to it, clean it:
<input>
Lucius Annaeus Seneca: "Svolného osud vede, zpurného vleče. (Volentem fata ducunt, nolentem trahunt.)"
</input>
<output>
{"score": 92, "cleanQuote": "Svolného osud vede, zpurného vleče."}
</output>"""


def quote_score_input(author: str, quote: str) -> str:
    """Format a quote candidate for scoring.

    Args:
        author: Canonical English name of the claimed author
        quote: Candidate text

    Returns:
        ``author: "quote"`` string
    """
    return f'{author}: "{quote}"'
