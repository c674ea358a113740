from qqgroupbot.exceptions import MiraiApiHttpError, NetworkError


def test_api_error_keeps_code_and_message():
    err = MiraiApiHttpError(5, "target missing")
    assert err.code == 5
    assert err.message == "target missing"
    assert str(err) == "mirai-api-http 错误: target missing"


def test_api_error_is_runtime_error():
    err = MiraiApiHttpError(1, "target missing")
    assert isinstance(err, RuntimeError)
    assert err.code == 1
    assert str(err).endswith("target missing")


def test_network_error_message():
    err = NetworkError()
    assert str(err) == "网络错误."
    assert isinstance(err, RuntimeError)