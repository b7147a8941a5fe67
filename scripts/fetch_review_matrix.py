#!/usr/bin/env python3
"""Fetch an organization's review matrix and print it."""
import asyncio
import sys

from dotenv import load_dotenv

load_dotenv()

from src.config import settings
from src.core.exceptions import ApiException
from src.services.matrix import Organization, fetch_organization_data


def format_matrix(organization: Organization) -> str:
    lines = [f"{organization.name}: {len(organization.reviewers)} reviewers"]
    for reviewer, cells in organization.matrix():
        lines.append(reviewer.name)
        for repo, assignments in zip(organization.repositories, cells):
            if assignments:
                chips = ", ".join(f"#{a.id} {a.state}" for a in assignments)
                lines.append(f"  {repo.name}: {chips}")
    return "\n".join(lines)


async def main(organization: str) -> int:
    try:
        result = await fetch_organization_data(organization, settings.github_token or "")
    except ApiException as e:
        print(f"Error: {e.message}", file=sys.stderr)
        return 1
    print(format_matrix(result))
    return 0

if __name__ == "__main__":
    org = sys.argv[1] if len(sys.argv) > 1 else settings.github_organization
    if not org:
        sys.exit("usage: fetch_review_matrix.py <organization>  (or set GITHUB_ORGANIZATION)")
    sys.exit(asyncio.run(main(org)))
