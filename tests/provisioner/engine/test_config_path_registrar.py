# tests/provisioner/engine/test_config_path_registrar.py
# -*- coding: utf-8 -*-
"""
Tests for publishing the reference assembly directory in the configuration store.
"""

from provisioner.engine.config_path_registrar import set_discovery_path

KEY = r"HKLM\SOFTWARE\Wow6432Node\Microsoft\.NETFramework\v4.0.30319\AssemblyFoldersEx\Tools"


def test_writes_when_absent(config_store):
    result = set_discovery_path(config_store, KEY, r"C:\Tools")

    assert result == r"C:\Tools"
    assert config_store.writes == [(KEY, r"C:\Tools")]


def test_second_call_with_same_value_does_not_write(config_store):
    first = set_discovery_path(config_store, KEY, r"C:\Tools")
    second = set_discovery_path(config_store, KEY, r"C:\Tools")

    assert first == second == r"C:\Tools"
    assert len(config_store.writes) == 1


def test_overwrites_different_value(config_store):
    config_store.values[(KEY, "")] = r"C:\Old"

    result = set_discovery_path(config_store, KEY, r"C:\New")

    assert result == r"C:\New"
    assert config_store.writes == [(KEY, r"C:\New")]
    assert config_store.get_default(KEY) == r"C:\New"


def test_existing_matching_value_is_reported(config_store):
    config_store.values[(KEY, "")] = r"C:\Tools"

    assert set_discovery_path(config_store, KEY, r"C:\Tools") == r"C:\Tools"
    assert config_store.writes == []
