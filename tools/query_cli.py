#!/usr/bin/env python3
"""
CLI tool for generating recipes from the command line.
Usage: python tools/query_cli.py --ingredients "egg,onion,butter" --lang en
"""

import argparse
import asyncio
import json
import sys
from pathlib import Path

sys.path.insert(0, str(Path(__file__).parent.parent))

from pydantic import ValidationError

from config.settings import get_settings
from app.core.recipe_handler import RecipeHandler
from app.models.schemas import Recipe


def parse_args():
    """Parse command line arguments."""
    parser = argparse.ArgumentParser(
        description="Generate recipes from available ingredients",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  python tools/query_cli.py --ingredients "egg,onion"
  python tools/query_cli.py -i "chicken,garlic,lemon" --lang en
  python tools/query_cli.py -i "pasta,tomato" --json
        """
    )

    parser.add_argument(
        "-i", "--ingredients",
        type=str,
        required=True,
        help="Comma-separated list of ingredients"
    )

    parser.add_argument(
        "-l", "--lang",
        type=str,
        default=None,
        help="Language code for the recipes (default: ar)"
    )

    parser.add_argument(
        "--json",
        action="store_true",
        help="Output the raw JSON response"
    )

    return parser.parse_args()


def format_recipe(recipe: Recipe) -> str:
    """Format a recipe for display."""
    output = []
    output.append(f"\n{'='*60}")
    output.append(f"  {recipe.title}")
    if recipe.time:
        output.append(f"  Time: {recipe.time}")
    output.append(f"{'='*60}")

    if recipe.desc:
        output.append(f"\n  {recipe.desc}")

    output.append(f"\n  Ingredients:")
    for item in recipe.ingredients:
        output.append(f"    - {item}")

    output.append(f"\n  Steps:")
    for i, step in enumerate(recipe.steps, 1):
        output.append(f"    {i}. {step}")

    return "\n".join(output)


def main():
    """Main CLI entry point."""
    args = parse_args()

    body = {"ingredients": args.ingredients}
    if args.lang:
        body["lang"] = args.lang

    handler = RecipeHandler(get_settings())
    result = asyncio.run(handler.handle("POST", json.dumps(body).encode("utf-8")))

    if result.status_code != 200:
        error = result.json()
        print(f"Error ({result.status_code}): {error.get('error')}: {error.get('message')}", file=sys.stderr)
        if error.get("details"):
            print(f"  {error['details']}", file=sys.stderr)
        sys.exit(1)

    data = result.json()
    if args.json:
        print(json.dumps(data, indent=2, ensure_ascii=False))
        return

    if not isinstance(data, list):
        data = [data]

    print(f"Generated {len(data)} recipes for: {args.ingredients}")
    for item in data:
        try:
            print(format_recipe(Recipe.model_validate(item)))
        except ValidationError:
            print(json.dumps(item, indent=2, ensure_ascii=False))


if __name__ == "__main__":
    main()
