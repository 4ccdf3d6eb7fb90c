"""Request a structured movie review from the OpenAI Responses API.

    APP_OPENAI_API_KEY=... python -m schema_bridge.scripts.movie_review_demo --title "The Matrix" --year 1999
"""

from __future__ import annotations

import argparse
import asyncio
import json
import uuid

from schema_bridge.config import settings
from schema_bridge.events import EventLog
from schema_bridge.llm.openai_responses import OpenAIResponsesLLMClient
from schema_bridge.runtime import StructuredOutputRunner

MOVIE_REVIEW_SCHEMA = {
    'type': 'object',
    'properties': {
        'title': {'type': 'string', 'description': 'The title of the movie'},
        'rating': {'type': 'number', 'description': 'Rating from 1-10'},
        'genre': {
            'type': 'array',
            'description': 'List of genres for the movie',
            'items': {'type': 'string'},
        },
        'summary': {'type': 'string', 'description': 'Brief summary of the movie'},
        'pros': {
            'type': 'array',
            'description': 'Positive aspects of the movie',
            'items': {'type': 'string'},
        },
        'cons': {
            'type': 'array',
            'description': 'Negative aspects of the movie',
            'items': {'type': 'string'},
        },
        'recommendation': {'type': 'boolean', 'description': 'Whether you recommend this movie'},
    },
    'required': ['title', 'rating', 'genre', 'summary', 'pros', 'cons', 'recommendation'],
    'additionalProperties': False,
}


async def main() -> None:
    parser = argparse.ArgumentParser()
    parser.add_argument('--title', default='The Matrix')
    parser.add_argument('--year', default='1999')
    parser.add_argument('--model', default=settings.openai_model)
    parser.add_argument('--event-log', default=settings.event_log_path)
    args = parser.parse_args()

    llm = OpenAIResponsesLLMClient.from_env(model=args.model, settings=settings)
    runner = StructuredOutputRunner(
        llm=llm,
        schema=MOVIE_REVIEW_SCHEMA,
        name='movie_review',
        max_retries=settings.structured_output_max_retries,
        unknown_fields=settings.schema_unknown_fields,
    )

    prompt = f'Review the movie "{args.title}" ({args.year}) and provide a structured analysis.'
    run_id = uuid.uuid4().hex

    with EventLog(args.event_log) as events:
        events.on_custom_event('review_requested', {'title': args.title, 'year': args.year}, run_id=run_id)
        review = await runner.run(prompt)
        events.on_custom_event('review_received', review.model_dump(by_alias=True), run_id=run_id, tags=['demo'])

    print("\n=== MOVIE REVIEW ===")
    print(json.dumps(review.model_dump(by_alias=True), indent=2, ensure_ascii=False))


if __name__ == '__main__':
    asyncio.run(main())
