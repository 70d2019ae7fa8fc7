import logging
import os
from datetime import datetime
from logging.handlers import RotatingFileHandler
from pathlib import Path
from typing import Any, Dict, Optional
from flask import Flask, jsonify

from config.settings import load_config, load_diff_settings, load_tool_config, is_tool_enabled
from config.tools import TOOLS
from blueprints.text_diff import text_diff_bp

LOG_FILE_MAX_BYTES = 5 * 1024 * 1024  # 5MB max per log file
LOG_BACKUP_COUNT = 5
LOG_FORMAT = '%(asctime)s %(levelname)s [%(name)s] %(message)s'

app_root = Path(__file__).parent.parent

logger = logging.getLogger(__name__)


def configure_logging(log_dir: Optional[Path] = None, level: int = logging.INFO) -> None:
    """Send logs to the console and to a rotating file under logs/"""
    root = logging.getLogger()
    if getattr(root, '_text_diff_configured', False):
        return

    log_dir = Path(log_dir) if log_dir else app_root / "logs"
    os.makedirs(log_dir, exist_ok=True)

    formatter = logging.Formatter(LOG_FORMAT)

    console = logging.StreamHandler()
    console.setFormatter(formatter)
    root.addHandler(console)

    file_handler = RotatingFileHandler(
        log_dir / "text-diff.log",
        maxBytes=LOG_FILE_MAX_BYTES,
        backupCount=LOG_BACKUP_COUNT,
        encoding='utf-8'
    )
    file_handler.setFormatter(formatter)
    root.addHandler(file_handler)

    root.setLevel(level)
    root._text_diff_configured = True


def get_enabled_tools(tools_list, tool_config: Dict[str, Any]):
    """Filter tools list to only include enabled tools."""
    return [tool for tool in tools_list if is_tool_enabled(tool.get('id', ''), tool_config)]


def create_app(config: Optional[Dict[str, Any]] = None) -> Flask:
    """Create the Flask application.

    ``config`` is the parsed config file contents; it is read from disk when
    not given.
    """
    config = load_config() if config is None else config
    tool_config = load_tool_config(config)

    flask_app = Flask(__name__)
    flask_app.config['TEXT_DIFF_SETTINGS'] = load_diff_settings(config)
    flask_app.config['TOOL_CONFIG'] = tool_config

    if is_tool_enabled('text-diff', tool_config):
        flask_app.register_blueprint(text_diff_bp)
    else:
        logger.info("Text diff tool disabled in config")

    @flask_app.route('/api/tools')
    def api_tools():
        return jsonify({'tools': get_enabled_tools(TOOLS, tool_config)})

    @flask_app.route('/health')
    def health():
        enabled = get_enabled_tools(TOOLS, tool_config)
        return jsonify({
            'status': 'healthy',
            'timestamp': datetime.now().isoformat(),
            'tools_count': len(enabled),
            'settings': flask_app.config['TEXT_DIFF_SETTINGS'].to_dict()
        })

    return flask_app


app = create_app()

if __name__ == '__main__':
    configure_logging()
    app.run(host='127.0.0.1', port=8000, debug=True)
