"""Entry point for auralingo CLI client."""

import argparse
import sys

from core.config import MASTERY_PREFIX
from cli.api_client import AuralingoAPIClient
from cli.console import ConsoleUI


def main():
    parser = argparse.ArgumentParser(description='Auralingo - English grammar and vocabulary practice')
    parser.add_argument(
        '--server',
        default='http://localhost:8000',
        help='Server URL (default: http://localhost:8000)'
    )
    parser.add_argument(
        '--user',
        default='default',
        help='User ID (default: default)'
    )
    parser.add_argument(
        '--mastery',
        action='store_true',
        help='Run quizzes in mastery mode (credited separately)'
    )
    args = parser.parse_args()

    client = AuralingoAPIClient(base_url=args.server, user_id=args.user)
    ui = ConsoleUI(client, mode=MASTERY_PREFIX if args.mastery else '')

    try:
        ui.run()
    except KeyboardInterrupt:
        print('\nGoodbye!')
        sys.exit(0)


if __name__ == '__main__':
    main()
