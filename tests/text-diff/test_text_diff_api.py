#!/usr/bin/env python3
"""
Tests for the Text Diff API endpoints using the Flask test client
"""

import json
import unittest

from main import create_app


class TextDiffApiTestCase(unittest.TestCase):

    def setUp(self):
        app = create_app({})
        app.config['TESTING'] = True
        self.client = app.test_client()

    def post(self, url, payload):
        response = self.client.post(url, json=payload)
        return response, json.loads(response.data)


class TestCompareEndpoint(TextDiffApiTestCase):
    """Test /api/text-diff/compare"""

    def test_default_json_format(self):
        response, data = self.post('/api/text-diff/compare', {
            'text1': 'line1\nline2\nline3',
            'text2': 'line1\nlineB\nline3'
        })

        self.assertEqual(response.status_code, 200)
        self.assertTrue(data['success'])
        self.assertEqual(data['format'], 'json')
        self.assertNotIn('diff', data)
        self.assertEqual([op['type'] for op in data['ops']], ['equal', 'replace', 'equal'])
        self.assertEqual(data['stats']['modifications'], 1)
        self.assertEqual(data['stats']['similarity'], 66.7)
        self.assertEqual(data['clusters'], [1])
        self.assertEqual(len(data['view']), 3)

    def test_replace_carries_word_ops(self):
        _, data = self.post('/api/text-diff/compare', {'text1': 'the quick fox', 'text2': 'the slow fox'})
        word_ops = data['ops'][0]['word_ops']

        self.assertIn({'type': 'delete', 'original': 'quick', 'modified': None}, word_ops)
        self.assertIn({'type': 'insert', 'original': None, 'modified': 'slow'}, word_ops)

    def test_line_numbers_are_one_based(self):
        _, data = self.post('/api/text-diff/compare', {'text1': 'a\nb', 'text2': 'a\nb\nc'})

        self.assertEqual(data['ops'][2]['line_num_1'], None)
        self.assertEqual(data['ops'][2]['line_num_2'], 3)

    def test_ignore_case_option(self):
        _, data = self.post('/api/text-diff/compare', {
            'text1': 'Hello', 'text2': 'hello', 'ignore_case': True
        })

        self.assertEqual([op['type'] for op in data['ops']], ['equal'])
        self.assertEqual(data['stats']['similarity'], 100.0)

    def test_ignore_whitespace_option(self):
        _, data = self.post('/api/text-diff/compare', {
            'text1': 'a   b', 'text2': 'a b', 'ignore_whitespace': True
        })

        self.assertEqual([op['type'] for op in data['ops']], ['equal'])

    def test_swap(self):
        _, data = self.post('/api/text-diff/compare', {
            'text1': 'a\nb', 'text2': 'a', 'swap': True
        })

        self.assertEqual([op['type'] for op in data['ops']], ['equal', 'insert'])
        self.assertEqual(data['stats']['additions'], 1)

    def test_collapsed_view(self):
        text1 = '\n'.join(str(i) for i in range(10))
        text2 = text1.replace('5', 'five')
        _, data = self.post('/api/text-diff/compare', {'text1': text1, 'text2': text2, 'collapse': True})

        self.assertEqual([item['type'] for item in data['view']], ['collapsed', 'line', 'collapsed'])
        self.assertEqual(data['view'][0]['count'], 5)
        self.assertEqual(data['stats']['unchanged'], 9)

    def test_collapse_min_run(self):
        text1 = '\n'.join(str(i) for i in range(10))
        text2 = text1.replace('5', 'five')
        _, data = self.post('/api/text-diff/compare', {
            'text1': text1, 'text2': text2, 'collapse': True, 'min_run': 5
        })

        self.assertEqual([item['type'] for item in data['view']], ['collapsed'] + ['line'] * 5)

    def test_unified_format(self):
        _, data = self.post('/api/text-diff/compare', {
            'text1': 'line1\nline2\nline3', 'text2': 'line1\nlineB\nline3', 'format': 'unified'
        })

        self.assertEqual(data['diff'], '  line1\n- line2\n+ lineB\n  line3')

    def test_side_by_side_format(self):
        _, data = self.post('/api/text-diff/compare', {
            'text1': 'a\nb', 'text2': 'a\nb\nc', 'format': 'side-by-side'
        })

        self.assertEqual(len(data['rows']), 3)
        self.assertIsNone(data['rows'][2]['left'])
        self.assertEqual(data['rows'][2]['right']['text'], 'c')

    def test_inline_format(self):
        _, data = self.post('/api/text-diff/compare', {
            'text1': 'line1\nline2', 'text2': 'line1\nlineB', 'format': 'inline'
        })

        self.assertEqual([row['prefix'] for row in data['rows']], [' ', '-', '+'])

    def test_stats_only_format(self):
        _, data = self.post('/api/text-diff/compare', {
            'text1': 'a\nb', 'text2': '', 'format': 'stats-only'
        })

        self.assertNotIn('diff', data)
        self.assertNotIn('ops', data)
        self.assertEqual(data['stats']['deletions'], 2)
        self.assertEqual(data['stats']['similarity'], 0.0)
        self.assertEqual(data['stats']['similarity_level'], 'low')

    def test_both_empty(self):
        _, data = self.post('/api/text-diff/compare', {'text1': '', 'text2': ''})

        self.assertEqual(data['ops'], [])
        self.assertEqual(data['stats']['similarity'], 100.0)

    def test_unknown_format(self):
        response, data = self.post('/api/text-diff/compare', {'text1': 'a', 'text2': 'b', 'format': 'xml'})

        self.assertEqual(response.status_code, 400)
        self.assertFalse(data['success'])

    def test_malformed_json(self):
        response = self.client.post('/api/text-diff/compare', data="not a valid json",
                                    content_type='application/json')
        data = response.get_json()

        self.assertEqual(response.status_code, 400)
        self.assertEqual(data['error'], 'Invalid JSON format')

    def test_missing_keys(self):
        response, data = self.post('/api/text-diff/compare', {'text1': 'some text'})

        self.assertEqual(response.status_code, 400)
        self.assertEqual(data['error'], 'Missing text1 or text2')

    def test_non_string_text(self):
        response, data = self.post('/api/text-diff/compare', {'text1': 5, 'text2': 'b'})

        self.assertEqual(response.status_code, 400)
        self.assertFalse(data['success'])

    def test_invalid_option_value(self):
        response, data = self.post('/api/text-diff/compare', {'text1': 'a', 'text2': 'b', 'ignore_case': 'yes'})

        self.assertEqual(response.status_code, 400)
        self.assertIn('ignore_case', data['error'])

    def test_collapse_must_be_boolean(self):
        same = '\n'.join(str(i) for i in range(10))
        response, data = self.post('/api/text-diff/compare', {
            'text1': same, 'text2': same, 'collapse': 'false'
        })

        self.assertEqual(response.status_code, 400)
        self.assertFalse(data['success'])
        self.assertIn('collapse', data['error'])

    def test_swap_must_be_boolean(self):
        response, data = self.post('/api/text-diff/compare', {'text1': 'a', 'text2': 'b', 'swap': 1})

        self.assertEqual(response.status_code, 400)
        self.assertIn('swap', data['error'])

    def test_invalid_min_run(self):
        response, _ = self.post('/api/text-diff/compare', {
            'text1': 'a', 'text2': 'b', 'collapse': True, 'min_run': 0
        })

        self.assertEqual(response.status_code, 400)

    def test_degraded_warning_is_reported(self):
        app = create_app({'text_diff': {'max_line_cells': 1}})
        client = app.test_client()
        response = client.post('/api/text-diff/compare', json={'text1': 'a\nb', 'text2': 'c\nd'})
        data = response.get_json()

        self.assertEqual(response.status_code, 200)
        self.assertTrue(data['degraded'])
        self.assertEqual(len(data['warnings']), 1)


class TestExportEndpoint(TextDiffApiTestCase):
    """Test /api/text-diff/export"""

    def test_export(self):
        response, data = self.post('/api/text-diff/export', {'text1': 'a\nb', 'text2': 'a\nc'})

        self.assertEqual(response.status_code, 200)
        self.assertEqual(data['diff'], '  a\n- b\n+ c')
        self.assertEqual(data['stats']['modifications'], 1)

    def test_export_missing_keys(self):
        response, data = self.post('/api/text-diff/export', {'text2': 'x'})

        self.assertEqual(response.status_code, 400)
        self.assertFalse(data['success'])


class TestNavigateEndpoint(TextDiffApiTestCase):
    """Test /api/text-diff/navigate"""

    TEXT1 = 'a\nb\nc\nd\ne'
    TEXT2 = 'a\nB\nc\nD\ne'

    def navigate(self, position, direction):
        return self.post('/api/text-diff/navigate', {
            'text1': self.TEXT1, 'text2': self.TEXT2, 'position': position, 'direction': direction
        })

    def test_first_next(self):
        _, data = self.navigate(None, 'next')

        self.assertEqual(data['position'], 0)
        self.assertEqual(data['index'], 1)
        self.assertEqual(data['total'], 2)

    def test_next_wraps(self):
        _, data = self.navigate(1, 'next')

        self.assertEqual(data['position'], 0)
        self.assertEqual(data['index'], 1)

    def test_previous_wraps(self):
        _, data = self.navigate(0, 'previous')

        self.assertEqual(data['position'], 1)
        self.assertEqual(data['index'], 3)

    def test_no_changes(self):
        _, data = self.post('/api/text-diff/navigate', {'text1': 'same', 'text2': 'same'})

        self.assertIsNone(data['position'])
        self.assertIsNone(data['index'])
        self.assertEqual(data['total'], 0)

    def test_bad_direction(self):
        response, _ = self.navigate(None, 'sideways')
        self.assertEqual(response.status_code, 400)

    def test_position_out_of_range(self):
        response, _ = self.navigate(7, 'next')
        self.assertEqual(response.status_code, 400)

    def test_position_wrong_type(self):
        response, _ = self.navigate('1', 'next')
        self.assertEqual(response.status_code, 400)
