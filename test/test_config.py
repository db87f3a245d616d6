#!/usr/bin/env python3
import unittest
from dataclasses import replace
from unittest.mock import MagicMock, patch

from fyi.config import Config, ConfigError, ConfigStore, load_config
from fyi.health import run_health_checks


class TestLoadConfig(unittest.TestCase):
    def test_defaults(self):
        config = load_config({})
        self.assertTrue(config.debug)
        self.assertEqual(config.address, "0.0.0.0:8888")
        self.assertEqual(config.tags, ())
        self.assertEqual(config.token, "")
        self.assertEqual(config.username, "ForYourInformation")
        self.assertIsNone(config.timeout)
        self.assertEqual(config.healthz_timeout, 3)

    def test_values_from_env(self):
        config = load_config({
            "FYI_DEBUG": "false",
            "FYI_PORT": "9000",
            "FYI_TOKEN": "foobar",
            "FYI_TAGS": "infra, outage,,marketing",
            "FYI_GRAFANA_HOST": "https://grafana.example.com/",
            "FYI_GRAFANA_API_KEY": "key",
            "FYI_TIMEOUT": "2.5",
            "FYI_HEALTHZ_DIAL_TIMEOUT": "7",
        })
        self.assertFalse(config.debug)
        self.assertEqual(config.port, 9000)
        self.assertEqual(config.tags, ("infra", "outage", "marketing"))
        self.assertEqual(config.grafana_host, "https://grafana.example.com")
        self.assertEqual(config.timeout, 2.5)
        self.assertEqual(config.healthz_timeout, 7)

    def test_invalid_values(self):
        for env in ({"FYI_PORT": "http"}, {"FYI_PORT": "70000"}, {"FYI_DEBUG": "maybe"},
                    {"FYI_GRAFANA_HOST": "grafana:3000"}, {"FYI_TIMEOUT": "-1"},
                    {"FYI_HEALTHZ_DIAL_TIMEOUT": "soon"}, {"FYI_HEALTHZ_DIAL_TIMEOUT": "0"}):
            with self.assertRaises(ConfigError, msg=str(env)):
                load_config(env)

    def test_config_is_immutable(self):
        config = Config()
        with self.assertRaises(AttributeError):
            config.token = "x"


class TestConfigStore(unittest.TestCase):
    def test_reload_swaps(self):
        store = ConfigStore(Config())
        new = store.reload_from_env({"FYI_TAGS": "infra"})
        self.assertIs(store.get(), new)
        self.assertEqual(store.get().tags, ("infra",))

    def test_reload_keeps_listen_address_and_debug(self):
        original = Config(host="127.0.0.1", port=8888, debug=True, tags=("infra",))
        store = ConfigStore(original)
        new = store.reload_from_env({
            "FYI_HOST": "10.0.0.1", "FYI_PORT": "9999", "FYI_DEBUG": "false", "FYI_TAGS": "outage",
        })
        self.assertEqual(new.address, "127.0.0.1:8888")
        self.assertTrue(new.debug)
        self.assertEqual(new.tags, ("outage",))
        self.assertIs(store.get(), new)

    def test_reload_keeps_local_health_check_on_running_port(self):
        store = ConfigStore(Config(grafana_host="http://grafana.local", host="127.0.0.1", port=8888))
        store.reload_from_env({"FYI_PORT": "8889", "FYI_GRAFANA_HOST": "http://grafana.local"})
        with patch("fyi.health.socket.create_connection") as connect:
            connect.return_value = MagicMock()
            self.assertEqual(run_health_checks(store.get()), [])
        self.assertEqual(connect.call_args_list[-1].args[0], ("127.0.0.1", 8888))

    def test_invalid_reload_keeps_previous(self):
        original = Config(tags=("infra",))
        store = ConfigStore(original)
        with self.assertRaises(ConfigError):
            store.reload(replace(original, port=0))
        self.assertIs(store.get(), original)


if __name__ == '__main__':
    unittest.main()
