# repo_explorer/__main__.py
import logging

import config
from repo_explorer.explorer import ApiSearchBackend, ExplorerSession, LocalSearchBackend
from repo_explorer.github_client import GitHubClient
from repo_explorer.terminal import start_explorer


def main():
    logging.basicConfig(
        level=config.LOG_LEVEL,
        format='%(asctime)s - %(name)s - %(levelname)s - %(message)s'
    )
    if config.API_URL:
        backend = ApiSearchBackend(config.API_URL)
    else:
        backend = LocalSearchBackend(GitHubClient(token=config.GITHUB_TOKEN))
    start_explorer(ExplorerSession(backend))


if __name__ == "__main__":
    main()
