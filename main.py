#!/usr/bin/env python3
"""
Recall Tracker - Main Entry Point

This script serves as the command-line entry point for the Recall Tracker,
a client for browsing, searching and saving U.S. consumer product recalls.
"""

import sys
import argparse
from typing import List

from recall_tracker.config import AppConfig
from recall_tracker.models.recall import Recall
from recall_tracker.orchestrator import RecallOrchestrator
from recall_tracker.utils.init import init_application, write_env_example


def print_recalls(recalls: List[Recall], orchestrator: RecallOrchestrator):
    """Print one line per recall, marking saved ones."""
    if not recalls:
        print("No recalls found.")
        return
    for recall in recalls:
        marker = "*" if orchestrator.is_saved(recall.recall_id) else " "
        print(f"{marker} [{recall.recall_id}] {recall.title or '(untitled)'}  {recall.recall_date or ''}")


def main():
    """Main entry point for the application."""
    # Parse command line arguments
    parser = argparse.ArgumentParser(
        description='Recall Tracker - browse, search and save CPSC product recalls'
    )
    parser.add_argument(
        '--log-file',
        help='Also write logs to this file'
    )
    subparsers = parser.add_subparsers(dest='command', required=True)

    list_parser = subparsers.add_parser('list', help='List curated recalls page by page')
    list_parser.add_argument(
        '--pages',
        type=int,
        default=1,
        help='Number of pages to show (default: 1)'
    )

    search_parser = subparsers.add_parser('search', help='Search the curated recalls')
    search_parser.add_argument('query', help='Search text')

    save_parser = subparsers.add_parser('save', help='Toggle the saved state of a recall')
    save_parser.add_argument('recall_id', type=int, help='Recall ID')

    subparsers.add_parser('saved', help='List saved recalls')

    init_parser = subparsers.add_parser('init', help='Write a .env.example with every setting')
    init_parser.add_argument(
        '--force',
        action='store_true',
        help='Overwrite an existing .env.example'
    )

    args = parser.parse_args()
    config = AppConfig.from_env()

    # Initialize the application
    if not init_application(config.data_dir, config.log_level, args.log_file):
        print("Initialization failed. Please check logs for details.")
        sys.exit(1)

    if args.command == 'init':
        path = write_env_example(overwrite=args.force)
        print(f"Wrote {path}" if path else ".env.example already exists (use --force to overwrite).")
        return

    orchestrator = RecallOrchestrator(config)

    if args.command == 'save':
        saved = orchestrator.toggle_saved(args.recall_id)
        print(f"Recall {args.recall_id} {'saved' if saved else 'removed from saved recalls'}.")
        return

    if not orchestrator.fetch_recalls():
        print(f"Could not load recalls: {orchestrator.last_error}")
        sys.exit(1)

    if args.command == 'list':
        for _ in range(args.pages - 1):
            orchestrator.load_more()
        print_recalls(orchestrator.visible_recalls(), orchestrator)
        remaining = len(orchestrator.dataset) - orchestrator.pagination.cursor
        if remaining:
            print(f"\n... {remaining} more recalls (use --pages to show more)")
    elif args.command == 'search':
        orchestrator.set_query(args.query)
        orchestrator.search_agent.wait_until_idle()
        print_recalls(orchestrator.current_results(), orchestrator)
    elif args.command == 'saved':
        while orchestrator.pagination.has_more:
            orchestrator.load_more()
        print_recalls(orchestrator.saved_recalls(), orchestrator)


if __name__ == "__main__":
    main()
