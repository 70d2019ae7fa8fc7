#!/usr/bin/env python3
"""
Integration tests for the Text Diff API against a running server
"""

import pytest
import requests

pytestmark = pytest.mark.integration


def test_compare_against_running_server(server_url):
    response = requests.post(f'{server_url}/api/text-diff/compare', json={
        'text1': 'line1\nline2\nline3',
        'text2': 'line1\nlineB\nline3'
    }, timeout=10)

    assert response.status_code == 200
    data = response.json()
    assert data['success']
    assert [op['type'] for op in data['ops']] == ['equal', 'replace', 'equal']


def test_export_against_running_server(server_url):
    response = requests.post(f'{server_url}/api/text-diff/export', json={
        'text1': 'a\nb', 'text2': 'a\nb\nc'
    }, timeout=10)

    assert response.status_code == 200
    assert response.json()['diff'] == '  a\n  b\n+ c'


def test_health_against_running_server(server_url):
    response = requests.get(f'{server_url}/health', timeout=10)

    assert response.status_code == 200
    assert response.json()['status'] == 'healthy'
