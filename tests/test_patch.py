import logging

import pytest

from bootstrap_installer.lib.patch import PatchError, backup_path_for, modify_line_in_file


CONF = 'LOG_TRACE="false"\nHOSTNAME="archlinux"\nUSER_NAME="picodotdev"\n'


def test_patch_replaces_line_and_leaves_backup(tmp_path):
    conf = tmp_path / "alis-minimal.conf"
    conf.write_text(CONF)

    modify_line_in_file(conf, 'HOSTNAME=".*"', 'HOSTNAME="myhost"')

    text = conf.read_text()
    assert 'HOSTNAME="myhost"' in text
    assert 'HOSTNAME="archlinux"' not in text
    assert 'USER_NAME="picodotdev"' in text

    backup = backup_path_for(conf)
    assert backup.name == "alis-minimal.conf.bak"
    assert backup.read_text() == CONF


def test_missing_file_raises_and_creates_no_backup(tmp_path):
    missing = tmp_path / "nope.conf"

    with pytest.raises(FileNotFoundError):
        modify_line_in_file(missing, 'HOSTNAME=".*"', 'HOSTNAME="x"')

    assert not missing.exists()
    assert not backup_path_for(missing).exists()


def test_bad_pattern_restores_original(tmp_path):
    conf = tmp_path / "alis.conf"
    conf.write_text(CONF)

    with pytest.raises(PatchError):
        modify_line_in_file(conf, 'HOSTNAME="(.*"', 'HOSTNAME="x"')

    assert conf.read_text() == CONF
    # The backup was moved back over the file.
    assert not backup_path_for(conf).exists()


def test_write_failure_restores_original(tmp_path, monkeypatch):
    conf = tmp_path / "alis.conf"
    conf.write_text(CONF)

    real_write = type(conf).write_text

    def boom(self, *args, **kwargs):
        if self == conf:
            real_write(self, "half written", encoding="utf-8")
            raise OSError("disk full")
        return real_write(self, *args, **kwargs)

    monkeypatch.setattr(type(conf), "write_text", boom)

    with pytest.raises(PatchError):
        modify_line_in_file(conf, 'HOSTNAME=".*"', 'HOSTNAME="x"')

    assert conf.read_text() == CONF


def test_first_match_per_line_like_sed(tmp_path):
    conf = tmp_path / "a.conf"
    conf.write_text('A="1" A="2"\nA="3"\n')

    modify_line_in_file(conf, 'A="[0-9]"', 'A="x"')

    assert conf.read_text() == 'A="x" A="2"\nA="x"\n'


def test_replacement_is_literal(tmp_path):
    conf = tmp_path / "a.conf"
    conf.write_text('USER_NAME="bob"\n')

    modify_line_in_file(conf, 'USER_NAME=".*"', r'USER_NAME="a\1b&c"')

    assert conf.read_text() == 'USER_NAME="a\\1b&c"\n'


def test_unanchored_pattern_also_hits_commented_lines(tmp_path):
    conf = tmp_path / "a.conf"
    conf.write_text('#HOSTNAME="old"\nHOSTNAME="cur"\n')

    modify_line_in_file(conf, 'HOSTNAME=".*"', 'HOSTNAME="new"')

    assert conf.read_text() == '#HOSTNAME="new"\nHOSTNAME="new"\n'


def test_no_match_is_not_an_error(tmp_path, caplog):
    conf = tmp_path / "a.conf"
    conf.write_text(CONF)

    with caplog.at_level(logging.WARNING):
        modify_line_in_file(conf, 'KEYMAP=".*"', 'KEYMAP="de"')

    assert conf.read_text() == CONF
    assert "matched nothing" in caplog.text


def test_verbose_logs_changed_line(tmp_path, caplog):
    conf = tmp_path / "a.conf"
    conf.write_text(CONF)

    with caplog.at_level(logging.DEBUG, logger="bootstrap_installer.lib.patch"):
        modify_line_in_file(conf, 'LOG_TRACE=".*"', 'LOG_TRACE="true"', verbose=True)

    assert "Changed line now reads as:" in caplog.text
    assert 'LOG_TRACE="true"' in caplog.messages


def test_second_patch_overwrites_backup(tmp_path):
    conf = tmp_path / "a.conf"
    conf.write_text(CONF)

    modify_line_in_file(conf, 'HOSTNAME=".*"', 'HOSTNAME="h"')
    after_first = conf.read_text()
    modify_line_in_file(conf, 'USER_NAME=".*"', 'USER_NAME="u"')

    assert backup_path_for(conf).read_text() == after_first
