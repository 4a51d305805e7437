"""
Recipe assistant system prompt.

Defines the NOMNOM persona, the grounding and refusal rules, the HTML answer
format, and the composer that fills the history and context slots.

Dependencies: langchain_core.prompts
System role: Prompt template for grounded recipe answers
"""

import logging

from langchain_core.prompts import ChatPromptTemplate

from nomnom.core.exceptions import ConfigurationError
from nomnom.models.prompt import ComposedPrompt

logger = logging.getLogger(__name__)

REFUSAL_MESSAGE = "I do not have the relevant information"

EMPTY_CONTEXT_MARKER = "No recipes matched this question."

REQUIRED_SLOTS = ("{history}", "{context}")

SYSTEM_TEMPLATE = f"""You are NOMNOM, a friendly and knowledgeable recipe recommender. You help users find
delicious recipes that fit their preferences, dietary restrictions and the ingredients they have.
You give clear instructions, complete ingredient lists and useful cooking tips, and you keep
your answers engaging and tailored to the user.

## Rules
1. ONLY use the recipes listed under "Recipes" below to answer the question.
2. Use the conversation so far to understand what the user is asking about.
3. Recommend a new recipe for a new question unless the user explicitly asks for the same
   recipe or a similar one. For example:
   Human: ...
   AI: Recipe 1
   Human: ...
   Here you should answer with a different recipe.
4. If the recipes below do not answer the question, reply exactly with "{REFUSAL_MESSAGE}".
5. Only answer questions about cooking or recipes. For any other question reply exactly with
   "{REFUSAL_MESSAGE}".

## Format
Format the answer in HTML. Use <strong> only for the headers: the dish name, Ingredients:,
Steps: and Comments:. Put a </br> after each section and after each recipe.

Example answer:
I have something I can recommend</br>
<ol class="list-decimal">
  <li>
  <strong> Pancakes </strong>
  </br>
  <strong> Ingredients: </strong>
  <ul class="list-disc">
    <li>1 cup all-purpose flour</li>
    <li>2 tablespoons sugar</li>
    <li>1 tablespoon baking powder</li>
    <li>1/2 teaspoon salt</li>
  </ul>
  </br>
  <strong> Steps: </strong>
  <ol class="list-decimal">
    <li>Mix the flour, sugar, baking powder and salt in a large bowl.</li>
    <li>Whisk the milk, egg, melted butter and vanilla extract in another bowl.</li>
    <li>Pour the wet ingredients into the dry ones and stir until just combined.</li>
  </ol>
  </li>
  </br><strong> Comments: </strong>
  Pancakes are a quick breakfast the whole family can enjoy.
  </br>
</ol>
Let me know if you have other questions!

----------------
Conversation so far:
{{history}}
----------------
Recipes:
{{context}}
"""

RECIPE_PROMPT = ChatPromptTemplate.from_messages([
    ("system", SYSTEM_TEMPLATE),
    ("human", "{question}"),
])


def _build_template(system_template: str) -> ChatPromptTemplate:
    if system_template == SYSTEM_TEMPLATE:
        return RECIPE_PROMPT

    missing = [slot for slot in REQUIRED_SLOTS if slot not in system_template]
    if missing:
        raise ConfigurationError(
            "System template is missing required slots",
            setting="system_template",
            details={"missing": missing},
        )
    try:
        template = ChatPromptTemplate.from_messages([
            ("system", system_template),
            ("human", "{question}"),
        ])
    except (ValueError, KeyError) as e:
        raise ConfigurationError(
            f"System template is malformed: {e}",
            setting="system_template",
        ) from e

    unexpected = set(template.input_variables) - {"history", "context", "question"}
    if unexpected:
        raise ConfigurationError(
            "System template has unknown slots",
            setting="system_template",
            details={"unknown": sorted(unexpected)},
        )
    return template


def compose(
    system_template: str,
    context_block: str,
    history_block: str,
    question: str,
) -> ComposedPrompt:
    """
    Fill the system template and attach the question.

    Substitution only: context and history go into the system message slots,
    the question becomes the single human message that follows it.

    Args:
        system_template: Template with {history} and {context} slots
        context_block: Sanitized recipes, may be empty
        history_block: Formatted transcript, may be empty
        question: The user's question

    Returns:
        ComposedPrompt: Immutable prompt

    Raises:
        ConfigurationError: If the template lacks a slot or cannot be parsed
    """
    template = _build_template(system_template)
    context_text = context_block if context_block else EMPTY_CONTEXT_MARKER

    messages = template.invoke({
        "history": history_block,
        "context": context_text,
        "question": question,
    }).to_messages()

    logger.debug(
        "Prompt composed",
        extra={
            "context_len": len(context_text),
            "history_len": len(history_block),
            "question_len": len(question),
        },
    )
    return ComposedPrompt(
        system_instructions=str(messages[0].content),
        context_block=context_block,
        history_block=history_block,
        question=question,
    )
