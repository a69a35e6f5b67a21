"""HTML rendering for the catalog viewer page."""

from __future__ import annotations

import re
from html import escape
from textwrap import dedent

from .countries import COUNTRIES
from .rendering import NO_IMAGE_TEXT, NO_RESULTS_HINT, NO_RESULTS_TEXT, Card
from .state import AppState


VIEWER_TEMPLATE = dedent(
    """
<!DOCTYPE html>
<html lang="ja">
<head>
    <meta charset="utf-8" />
    <meta name="viewport" content="width=device-width, initial-scale=1" />
    <title>__APP_NAME__</title>
    <style>
        body {
            margin: 0;
            font-family: 'Hiragino Sans', 'Noto Sans JP', system-ui, sans-serif;
            background: #f3f4f6;
            color: #111827;
        }
        main {
            max-width: 1200px;
            margin: 0 auto;
            padding: 2rem 1.5rem 4rem;
        }
        .toolbar {
            display: flex;
            flex-wrap: wrap;
            gap: 1rem;
            align-items: center;
            margin-bottom: 1rem;
        }
        .status.loading { color: #2563eb; }
        .status.success { color: #059669; }
        .status.error { color: #dc2626; }
        .timestamp.fetched { color: #059669; font-weight: 600; }
        .timestamp.missing { color: #dc2626; font-weight: 600; }
        .timestamp.unknown { color: #6b7280; }
        .filters {
            display: flex;
            flex-wrap: wrap;
            gap: 0.75rem;
            margin-bottom: 1.5rem;
        }
        .results {
            display: grid;
            grid-template-columns: repeat(auto-fill, minmax(220px, 1fr));
            gap: 1rem;
        }
        .result-card {
            background: #ffffff;
            border-radius: 12px;
            overflow: hidden;
            cursor: pointer;
            box-shadow: 0 1px 3px rgba(0, 0, 0, 0.12);
        }
        .result-image {
            width: 100%;
            aspect-ratio: 2 / 3;
            object-fit: cover;
        }
        .result-image.no-image {
            display: flex;
            align-items: center;
            justify-content: center;
            background: #e5e7eb;
            color: #6b7280;
        }
        .result-content { padding: 0.75rem; }
        .result-title { margin: 0 0 0.5rem; font-size: 1rem; }
        .result-meta { display: flex; gap: 0.5rem; font-size: 0.85rem; color: #4b5563; }
        .result-synopsis {
            white-space: pre-wrap;
            word-break: break-all;
            max-height: 3.5em;
            overflow: hidden;
            line-height: 1.5em;
        }
        .country-tag {
            display: inline-block;
            margin: 0 0.25rem 0.25rem 0;
            padding: 0.1rem 0.5rem;
            border-radius: 999px;
            background: #e0e7ff;
            font-size: 0.75rem;
        }
        .no-results { text-align: center; color: #6b7280; }
        .modal {
            display: none;
            position: fixed;
            inset: 0;
            background: rgba(0, 0, 0, 0.5);
        }
        .modal.open { display: block; }
        .modal-content {
            background: #ffffff;
            max-width: 640px;
            margin: 10vh auto;
            padding: 1.5rem;
            border-radius: 12px;
        }
        .close-button { float: right; cursor: pointer; font-size: 1.5rem; }
        #modalSynopsis { white-space: pre-wrap; }
    </style>
</head>
<body>
    <main>
        <h1>__APP_NAME__</h1>
        <div class="toolbar">
            <button id="loadBtn" type="button" __LOAD_DISABLED__>データを再読み込み</button>
            <span id="status" class="status __STATUS_KIND__">__STATUS_MESSAGE__</span>
            <span>データ更新日時: <span id="dataTimestamp" class="timestamp __TIMESTAMP_KIND__">__TIMESTAMP_TEXT__</span></span>
        </div>
        <div class="filters">
            <label><input type="checkbox" id="selectAll" __SELECT_ALL_CHECKED__ /> 全て選択</label>
            <label><input type="checkbox" id="deselectAll" __DESELECT_ALL_CHECKED__ /> 全て解除</label>
__COUNTRY_TOGGLES__
        </div>
        <p>該当作品数: <span id="resultCount">__RESULT_COUNT__</span></p>
        <div id="results" class="results">
__RESULTS__
        </div>
    </main>
    <div id="detailModal" class="modal __MODAL_OPEN__">
        <div class="modal-content">
            <span class="close-button">&times;</span>
            <h2 id="modalTitle">__MODAL_TITLE__</h2>
            <p id="modalSynopsis">__MODAL_SYNOPSIS__</p>
        </div>
    </div>
    <script>
        (function () {
            async function send(method, path, body) {
                const options = { method: method, headers: { 'Content-Type': 'application/json' } };
                if (body !== undefined) {
                    options.body = JSON.stringify(body);
                }
                try {
                    await fetch(path, options);
                } catch (err) {
                    console.error('Request failed', path, err);
                }
                window.location.reload();
            }

            document.getElementById('loadBtn').addEventListener('click', function () {
                this.disabled = true;
                send('POST', '/api/reload');
            });
            document.getElementById('selectAll').addEventListener('change', function (event) {
                send('POST', '/api/select-all', { checked: event.target.checked });
            });
            document.getElementById('deselectAll').addEventListener('change', function (event) {
                send('POST', '/api/deselect-all', { checked: event.target.checked });
            });
            document.querySelectorAll('.country-checkbox').forEach(function (checkbox) {
                checkbox.addEventListener('change', function () {
                    send('POST', '/api/countries', { code: checkbox.value, checked: checkbox.checked });
                });
            });
            document.querySelectorAll('.result-card').forEach(function (card) {
                card.addEventListener('click', function () {
                    const identity = card.getAttribute('data-work-id');
                    send('POST', '/api/detail/' + encodeURIComponent(identity));
                });
            });
            const modal = document.getElementById('detailModal');
            document.querySelector('.close-button').addEventListener('click', function () {
                send('DELETE', '/api/detail');
            });
            window.addEventListener('click', function (event) {
                if (event.target === modal) {
                    send('DELETE', '/api/detail');
                }
            });
        })();
    </script>
</body>
</html>
"""
)


def render_country_toggles(selected: set[str]) -> str:
    rows = []
    for country in COUNTRIES:
        checked = "checked" if country.code in selected else ""
        rows.append(
            "            <label><input type=\"checkbox\" class=\"country-checkbox\" "
            f"value=\"{escape(country.code)}\" {checked} /> {escape(country.name)}</label>"
        )
    return "\n".join(rows)


def render_card_html(card: Card) -> str:
    """Return the markup for a single result card."""

    if card.image_url:
        image_html = (
            f'<img src="{escape(card.image_url)}" alt="{escape(card.alt_text)}" '
            "class=\"result-image\" onerror=\"this.style.display='none'\">"
        )
    else:
        image_html = f'<div class="result-image no-image">{NO_IMAGE_TEXT}</div>'

    rating_html = ""
    if card.rating_badge:
        rating_html = f'<div class="result-rating">⭐ {escape(card.rating_badge)}</div>'

    countries = "".join(
        f'<span class="country-tag">{escape(tag)}</span>' for tag in card.country_tags
    )
    return f"""            <div class="result-card" data-work-id="{escape(card.identity)}">
                {image_html}
                <div class="result-content">
                    <h3 class="result-title">{escape(card.title)}</h3>
                    <div class="result-meta">
                        <span class="meta-type">{escape(card.type_label)}</span>
                        <span class="meta-year">{escape(card.year_label)}</span>
                        {rating_html}
                    </div>
                    <p class="result-synopsis">{escape(card.synopsis.text)}</p>
                    <div class="result-countries">{countries}</div>
                </div>
            </div>"""


def render_results_html(cards: list[Card]) -> str:
    if not cards:
        return f'            <p class="no-results">{NO_RESULTS_TEXT}<br>{NO_RESULTS_HINT}</p>'
    return "\n".join(render_card_html(card) for card in cards)


def render_viewer_page(state: AppState, *, app_name: str) -> str:
    """Return the full HTML for the viewer page from the current state."""

    detail = state.detail.record
    timestamp = state.timestamp
    replacements = {
        "__APP_NAME__": escape(app_name),
        "__LOAD_DISABLED__": "disabled" if state.reload_in_flight else "",
        "__STATUS_KIND__": state.status.kind,
        "__STATUS_MESSAGE__": escape(state.status.message),
        "__TIMESTAMP_KIND__": timestamp.kind if timestamp else "",
        "__TIMESTAMP_TEXT__": escape(timestamp.text) if timestamp else "",
        "__SELECT_ALL_CHECKED__": "checked" if state.select_all else "",
        "__DESELECT_ALL_CHECKED__": "checked" if state.deselect_all else "",
        "__COUNTRY_TOGGLES__": render_country_toggles(state.selected_countries),
        "__RESULT_COUNT__": str(state.result_count),
        "__MODAL_OPEN__": "open" if detail else "",
        "__MODAL_TITLE__": escape(detail.title) if detail else "",
        "__MODAL_SYNOPSIS__": escape(detail.synopsis) if detail else "",
        "__RESULTS__": render_results_html(state.cards),
    }
    # Single pass so inserted values are never rescanned for placeholders.
    pattern = re.compile("|".join(map(re.escape, replacements)))
    return pattern.sub(lambda match: replacements[match.group(0)], VIEWER_TEMPLATE)
