import logging
from typing import Any, Dict, Tuple
from flask import Blueprint, current_app, request, jsonify

from text_diff import (
    DiffOptions, DiffResult, DiffSettings, TextDiffError,
    change_clusters, collapse_unchanged, compute_diff, expand_all,
    inline_rows, side_by_side_rows, step_cluster, unified_text
)

logger = logging.getLogger(__name__)

text_diff_bp = Blueprint('text_diff', __name__)

OUTPUT_FORMATS = ('json', 'unified', 'side-by-side', 'inline', 'stats-only')


class RequestError(Exception):
    """A request the API rejects with a 400."""
    pass


def get_settings() -> DiffSettings:
    return current_app.config.get('TEXT_DIFF_SETTINGS') or DiffSettings()


def parse_request() -> Dict[str, Any]:
    """Read and check the JSON body shared by all text diff endpoints"""
    data = request.get_json(silent=True)
    if not isinstance(data, dict):
        raise RequestError('Invalid JSON format')

    if 'text1' not in data or 'text2' not in data:
        raise RequestError('Missing text1 or text2')

    for flag in ('swap', 'collapse'):
        if not isinstance(data.get(flag, False), bool):
            raise RequestError(f'{flag} must be a boolean')

    return data


def diff_from_request(data: Dict[str, Any]) -> DiffResult:
    """Run the diff for a parsed request, honouring the 'swap' flag"""
    text1, text2 = data['text1'], data['text2']
    if data.get('swap', False):
        text1, text2 = text2, text1

    options = DiffOptions.from_dict(data)
    return compute_diff(text1, text2, options, get_settings())


def build_view(result: DiffResult, data: Dict[str, Any]) -> list:
    """Collapsed or fully expanded rows for the 'json' format"""
    if not data.get('collapse', False):
        return [item.to_dict() for item in expand_all(result.ops)]

    min_run = data.get('min_run', get_settings().collapse_min_run)
    return [item.to_dict() for item in collapse_unchanged(result.ops, min_run)]


def error_response(message: str, status: int) -> Tuple[Any, int]:
    return jsonify({'success': False, 'error': message}), status


@text_diff_bp.route('/api/text-diff/compare', methods=['POST'])
def compare_texts():
    """Compare two texts and return the line and word level diff

    Supports multiple output formats:
    - json: ops, stats, change clusters and view rows (default)
    - unified: plain text export ('  ', '- ', '+ ' prefixes)
    - side-by-side: one row per op with left/right cells
    - inline: single column rows with +/-/space prefixes
    - stats-only: just statistics

    Options:
    - ignore_whitespace: Ignore whitespace differences
    - ignore_case: Case insensitive comparison
    - swap: Compare text2 against text1
    - collapse: Hide long runs of unchanged lines (json format)
    - min_run: Shortest unchanged run that gets collapsed
    """
    try:
        data = parse_request()
        output_format = data.get('format', 'json')
        if output_format not in OUTPUT_FORMATS:
            raise RequestError(f'Unknown format: {output_format}')

        result = diff_from_request(data)
        response = {
            'success': True,
            'format': output_format,
            'stats': result.stats.to_dict(),
            'warnings': list(result.warnings),
            'degraded': result.degraded
        }

        if output_format == 'unified':
            response['diff'] = unified_text(result.ops)
        elif output_format == 'side-by-side':
            response['rows'] = [row.to_dict() for row in side_by_side_rows(result.ops)]
        elif output_format == 'inline':
            response['rows'] = [row.to_dict() for row in inline_rows(result.ops)]
        elif output_format == 'json':
            response['ops'] = [op.to_dict() for op in result.ops]
            response['clusters'] = change_clusters(result.ops)
            response['view'] = build_view(result, data)

        return jsonify(response)

    except (RequestError, TextDiffError) as e:
        return error_response(str(e), 400)
    except Exception as e:
        logger.exception("Text diff comparison failed")
        return error_response(str(e), 500)


@text_diff_bp.route('/api/text-diff/export', methods=['POST'])
def export_diff():
    """Return the diff as copyable text"""
    try:
        data = parse_request()
        result = diff_from_request(data)
        return jsonify({
            'success': True,
            'diff': unified_text(result.ops),
            'stats': result.stats.to_dict()
        })

    except (RequestError, TextDiffError) as e:
        return error_response(str(e), 400)
    except Exception as e:
        logger.exception("Text diff export failed")
        return error_response(str(e), 500)


@text_diff_bp.route('/api/text-diff/navigate', methods=['POST'])
def navigate_changes():
    """Step to the next or previous change cluster, wrapping around

    Body: text1, text2 (plus compare options), position (null or the current
    cluster number, 0-based) and direction ('next' or 'previous').
    """
    try:
        data = parse_request()
        direction = data.get('direction', 'next')
        if direction not in ('next', 'previous'):
            raise RequestError("direction must be 'next' or 'previous'")

        position = data.get('position')
        if position is not None and (isinstance(position, bool) or not isinstance(position, int)):
            raise RequestError('position must be an integer or null')

        result = diff_from_request(data)
        clusters = change_clusters(result.ops)
        new_position = step_cluster(position, len(clusters), 1 if direction == 'next' else -1)

        return jsonify({
            'success': True,
            'position': new_position,
            'index': clusters[new_position] if new_position is not None else None,
            'total': len(clusters)
        })

    except (RequestError, TextDiffError) as e:
        return error_response(str(e), 400)
    except Exception as e:
        logger.exception("Text diff navigation failed")
        return error_response(str(e), 500)
