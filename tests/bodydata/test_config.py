import os
from unittest import mock

from bodydata.config import DEFAULT_ENCODING, ValueFromEnvironment
from bodydata.options import ParseOptions


def test_default_value():
    v = ValueFromEnvironment("BODYDATA_TEST_VALUE", "foo")
    assert v.value == "foo"
    assert str(v) == "foo"


@mock.patch.dict(os.environ, {"BODYDATA_TEST_VALUE": "bar"})
def test_value_from_envvar():
    v = ValueFromEnvironment("BODYDATA_TEST_VALUE", "foo")
    assert v.value == "bar"


@mock.patch.dict(os.environ, {"BODYDATA_TEST_VALUE": ""})
def test_empty_envvar_is_unset():
    v = ValueFromEnvironment("BODYDATA_TEST_VALUE", "foo")
    assert v.value == "foo"


def test_value_is_read_on_access():
    v = ValueFromEnvironment("BODYDATA_TEST_VALUE", "foo")
    with mock.patch.dict(os.environ, {"BODYDATA_TEST_VALUE": "bar"}):
        assert v.value == "bar"
    assert v.value == "foo"


@mock.patch.dict(os.environ, {}, clear=True)
def test_options_defaults():
    options = ParseOptions()
    assert options.effective_encoding == "utf-8"
    assert options.raw is False
    assert options.content_type is None
    assert options.back_content_type is None
    assert options.on_error is None


@mock.patch.dict(os.environ, {"BODYDATA_ENCODING": "latin-1"})
def test_options_encoding():
    assert ParseOptions().effective_encoding == "latin-1"
    assert ParseOptions(encoding="utf-16").effective_encoding == "utf-16"
    assert DEFAULT_ENCODING.value == "latin-1"
