"""
Unit tests for the sync payload schemas
"""

import pytest
from marshmallow import ValidationError

from cronradar.schemas import MonitorDefinitionSchema, build_sync_payload


class TestBuildSyncPayload:
    """Tests for build_sync_payload()"""

    def test_grace_period_uses_camel_case(self):
        payload = build_sync_payload('manual', [{
            'key': 'backup',
            'name': 'Backup',
            'schedule': '0 2 * * *',
            'grace_period': 90,
        }])

        assert payload == {
            'source': 'manual',
            'monitors': [{
                'key': 'backup',
                'name': 'Backup',
                'schedule': '0 2 * * *',
                'gracePeriod': 90,
            }],
        }

    def test_default_grace_period(self):
        payload = build_sync_payload('manual', [{
            'key': 'backup', 'name': 'Backup', 'schedule': '@daily',
        }])

        assert payload['monitors'][0]['gracePeriod'] == 60

    @pytest.mark.parametrize('monitor', [
        {'key': '', 'name': 'Backup', 'schedule': '0 2 * * *'},
        {'key': 'backup', 'name': None, 'schedule': '0 2 * * *'},
        {'key': 'backup', 'name': 'Backup', 'schedule': ''},
        {'key': 'backup', 'name': 'Backup', 'schedule': '0 2 * * *', 'grace_period': 0},
    ])
    def test_invalid_monitor(self, monitor):
        with pytest.raises(ValidationError):
            build_sync_payload('manual', [monitor])

    def test_empty_batch(self):
        with pytest.raises(ValidationError):
            build_sync_payload('manual', [])

    def test_empty_source(self):
        with pytest.raises(ValidationError):
            build_sync_payload('', [{'key': 'b', 'name': 'B', 'schedule': '* * * * *'}])


class TestMonitorDefinitionSchema:
    """Tests for loading monitor definitions"""

    def test_load_applies_default_grace_period(self):
        data = MonitorDefinitionSchema().load({
            'key': 'backup', 'name': 'Backup', 'schedule': '0 2 * * *',
        })

        assert data['grace_period'] == 60
