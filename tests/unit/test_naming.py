"""
Unit tests for monitor name generation
"""

import pytest

from cronradar.naming import humanize


class TestHumanize:
    """Tests for humanize()"""

    @pytest.mark.parametrize('key, expected', [
        ('daily-backup', 'Daily Backup'),
        ('check-overdue-pings', 'Check Overdue Pings'),
        ('DAILY-BACKUP', 'Daily Backup'),
        ('daily_backup_job', 'Daily Backup Job'),
        ('Check_Overdue_PINGS', 'Check Overdue Pings'),
    ])
    def test_separated_keys_become_title_case(self, key, expected):
        """Test kebab-case and snake_case keys"""
        name = humanize(key)

        assert name == expected
        assert '-' not in name
        assert '_' not in name

    def test_dash_wins_over_underscore(self):
        """Test that '-' is split first and '_' is kept"""
        assert humanize('daily-backup_job') == 'Daily Backup_job'

    def test_pascal_case_gets_spaces(self):
        """Test PascalCase keys"""
        assert humanize('CheckOverduePings') == 'Check Overdue Pings'
        assert humanize('Backup') == 'Backup'

    def test_lowercase_key_is_capitalized(self):
        """Test that only the first character changes"""
        assert humanize('backup') == 'Backup'
        assert humanize('nightlyBackup') == 'NightlyBackup'

    def test_empty_key(self):
        """Test that the empty string is returned unchanged"""
        assert humanize('') == ''

    def test_empty_segments(self):
        """Test leading, trailing and doubled separators"""
        assert humanize('-backup') == ' Backup'
        assert humanize('a--b') == 'A  B'
