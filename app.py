# app.py
import logging
import sys
import threading
import webbrowser

from flask import Flask, jsonify, redirect, render_template, request, session, url_for
from flask_cors import CORS

import config
from repo_explorer.errors import SearchError
from repo_explorer.explorer import INITIAL_STATE, LocalSearchBackend, SessionStore
from repo_explorer.github_client import GitHubClient
from repo_explorer.models import ORDER_OPTIONS, SORT_OPTIONS, SearchFilters
from repo_explorer.pager import run_search
from repo_explorer.render import (
    FORM_FIELDS, card_description, card_label, rate_limit_line, status_line,
)

logger = logging.getLogger(__name__)


def render_explorer(filters, state):
    return render_template(
        'index.html',
        filters=filters,
        state=state,
        form_fields=FORM_FIELDS,
        sort_options=SORT_OPTIONS,
        order_options=ORDER_OPTIONS,
        status_line=status_line(state),
        rate_limit_line=rate_limit_line(state),
    )


def create_app(client=None, store=None):
    """client: anything with search_repositories()/get_rate_limit(); a GitHubClient by default."""
    app = Flask(__name__)
    app.secret_key = config.SECRET_KEY
    CORS(app)

    if client is None:
        client = GitHubClient(token=config.GITHUB_TOKEN)
    if store is None:
        store = SessionStore(lambda: LocalSearchBackend(client))
    app.extensions["explorer_sessions"] = store

    app.add_template_filter(card_label)
    app.add_template_filter(card_description)

    def current_session():
        if "sid" not in session:
            session["sid"] = store.new_id()
        return store.get(session["sid"])

    @app.route('/')
    def index():
        # Only searching creates a session; a plain visit shows the empty form.
        explorer = store.peek(session.get("sid"))
        if explorer is None:
            return render_explorer(SearchFilters(), INITIAL_STATE)
        return render_explorer(explorer.filters, explorer.state)

    @app.route('/search', methods=['POST'])
    def search():
        explorer = current_session()
        explorer.set_filters(SearchFilters.from_mapping(request.form))
        explorer.search()
        return redirect(url_for('index'))

    @app.route('/clear', methods=['POST'])
    def clear():
        explorer = store.peek(session.get("sid"))
        if explorer is not None:
            explorer.clear()
        return redirect(url_for('index'))

    @app.route('/api/search', methods=['GET'])
    def search_api():
        filters = SearchFilters.from_mapping(request.args)
        try:
            response = run_search(filters, client)
            return jsonify(response.to_dict()), 200
        except SearchError as e:
            return jsonify({"error": e.message, "status": e.status}), e.status
        except Exception as e:
            logger.error(f"An error occurred in the search API route: {e}", exc_info=True)
            message = str(e) or "Internal server error"
            return jsonify({"error": message, "status": 500}), 500

    return app


app = create_app()


def main():
    logging.basicConfig(
        level=config.LOG_LEVEL,
        format='%(asctime)s - %(name)s - %(levelname)s - %(message)s'
    )
    url = f"http://{config.HOST}:{config.PORT}"

    if not config.GITHUB_TOKEN:
        logger.warning("GITHUB_TOKEN not set. Using unauthenticated requests (limited rate).")

    if config.OPEN_BROWSER:
        # Give the server a moment to start before the browser connects
        threading.Timer(1, lambda: webbrowser.open_new(url)).start()

    logger.info(f"GitHub Repository Explorer running at {url}")
    try:
        app.run(host=config.HOST, port=config.PORT)
    except OSError as e:
        logger.error(f"Port {config.PORT} is already in use. Stop the existing process or set PORT to a different value. ({e})")
        sys.exit(1)


if __name__ == '__main__':
    main()
