"""Quick smoke run — generates recommendations for a sample assessment and prints the payload."""

import asyncio
import json
import logging
import sys

from dotenv import load_dotenv

from skinmatch import RecommendationService
from skinmatch.config import get_settings

load_dotenv()
logging.basicConfig(level=get_settings().log_level)

# A realistic assessment as the web form sends it
sample_assessment = {
    "skinType": "combination",
    "concerns": ["Acne Breakouts", "dark spots"],
    "medicalConditions": [],
    "age": 28,
    "gender": "female",
    "sensitivity": "6",
    "location": "Mumbai",
    "budget": "mid_range",
    "experience": "beginner",
    "goals": ["even skin tone"],
    "lifestyle": "outdoor",
    "country": "IN",
}


async def main():
    print("=" * 60)
    print("Generating recommendations...")
    print("=" * 60)

    service = RecommendationService()
    result = await service.generate_recommendations("sample-user", sample_assessment)

    recs = result.recommendations
    print(f"\nmarket: {result.market} ({result.currency})")
    print(f"  essential: {[r.display_name for r in recs.essential]}")
    print(f"  targeted: {[r.display_name for r in recs.targeted]}")
    print(f"  morning steps: {len(result.routine_suggestions.morning)}")
    print(f"  evening steps: {len(result.routine_suggestions.evening)}")
    if result.budget_summary:
        print(f"  total: {result.budget_summary.total} {result.budget_summary.currency}")
    if result.fallback:
        print(f"\nFALLBACK: {result.error}")

    print("\nFull output:")
    json.dump(result.to_payload(), sys.stdout, indent=2, ensure_ascii=False)
    print()


if __name__ == "__main__":
    asyncio.run(main())
