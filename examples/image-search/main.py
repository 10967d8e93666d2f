"""Image Search - public photo feed search driven by a machina statechart."""
from __future__ import annotations

import argparse
import logging
import sys

import pygame

from machina_search import (
    FeedItem,
    MockFeedClient,
    PublicFeedClient,
    SearchConfig,
    SearchService,
    SearchWidget,
    configure_logging,
    load_config,
)

from ui.constants import COLOR_BG, FPS, SCREEN_H, SCREEN_W
from ui.form import SearchForm
from ui.results import ResultsPanel, draw_loading, draw_status, draw_zoomed

logger = logging.getLogger("image_search")


def _offline_items(query: str) -> list[FeedItem]:
    return [
        FeedItem(
            title=f"{query} #{n}",
            link=f"https://example.invalid/{query}/{n}",
            media_url=f"https://example.invalid/{query}/{n}_m.jpg",
            author="offline",
            tags=tuple(query.split()),
        )
        for n in range(1, 13)
    ]


def parse_args(argv: list[str] | None = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(description=__doc__)
    parser.add_argument("--config", help="JSON SearchConfig file")
    parser.add_argument("--offline", action="store_true",
                        help="use a canned mock feed instead of the network")
    parser.add_argument("--latency", type=float, default=0.8,
                        help="simulated latency of the offline feed (seconds)")
    parser.add_argument("--log-level", default="INFO")
    parser.add_argument("--log-file", default=None)
    return parser.parse_args(argv)


def main(argv: list[str] | None = None) -> None:
    args = parse_args(argv)
    configure_logging(args.log_level, filepath=args.log_file)

    config = load_config(args.config) if args.config else SearchConfig()
    if args.offline:
        client = MockFeedClient(_offline_items, latency=args.latency)
    else:
        client = PublicFeedClient(config)
    service = SearchService(client, config)
    widget = SearchWidget(service, config)

    pygame.init()
    screen = pygame.display.set_mode((SCREEN_W, SCREEN_H))
    pygame.display.set_caption("Image Search")
    clock = pygame.time.Clock()

    form = SearchForm()
    panel = ResultsPanel()

    running = True
    while running:
        clock.tick(FPS)

        # Search completions and delayed events from other threads
        widget.pump()

        # --- Events ---
        for event in pygame.event.get():
            if event.type == pygame.QUIT:
                running = False

            elif event.type == pygame.KEYDOWN:
                if event.key == pygame.K_RETURN:
                    widget.search()
                elif event.key == pygame.K_ESCAPE:
                    if widget.mode == "zoomed":
                        widget.zoom_out()
                    else:
                        widget.cancel()
                elif form.handle_key(event):
                    widget.change(form.text)

            elif event.type == pygame.MOUSEBUTTONDOWN and event.button == 1:
                if widget.mode == "zoomed":
                    widget.zoom_out()
                elif widget.mode == "results":
                    item = panel.item_at(event.pos, widget.results)
                    if item is not None:
                        widget.zoom(item)

        # --- Render ---
        screen.fill(COLOR_BG)
        form.draw(screen)
        if widget.mode == "loading":
            draw_loading(screen, widget.text)
        elif widget.mode == "results":
            panel.draw(screen, widget.results)
        elif widget.mode == "zoomed":
            draw_zoomed(screen, widget.selected)
        draw_status(screen, widget)

        pygame.display.flip()

    logger.info("Shutting down in state %s", widget.state)
    widget.close()
    service.shutdown()
    pygame.quit()
    sys.exit()


if __name__ == "__main__":
    main()
