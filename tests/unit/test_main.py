import json

from adapters.altstrade_adapter import AltsTradeAdapter
from config import ClientConfig
from main import coerce_args, main

from conftest import PRIVATE_KEY, PUBLIC_KEY, FakeSession


def client_with(session, public_key=PUBLIC_KEY, private_key=PRIVATE_KEY):
    return AltsTradeAdapter(public_key, private_key, cfg=ClientConfig(max_workers=1), session=session)


def test_main_prints_json_result(capsys):
    sess = FakeSession(body='{"last":"0.031"}')
    code = main(["ticker", "LTC_BTC"], client=client_with(sess))

    assert code == 0
    assert json.loads(capsys.readouterr().out) == {"last": "0.031"}
    assert sess.calls[0]["url"].endswith("/rest_api/ticker/LTC_BTC")
    assert sess.closed


def test_main_place_order_coerces_price():
    sess = FakeSession()
    code = main(["place_order", "BTC_USD", "sell", "2", "0.0001234567"], client=client_with(sess))

    assert code == 0
    assert b"price=0.00012346" in sess.calls[0]["data"]
    assert b"amount=2" in sess.calls[0]["data"]


def test_main_reports_missing_credentials():
    sess = FakeSession()
    code = main(["balance"], client=client_with(sess, None, None))

    assert code == 1
    assert sess.calls == []


def test_main_rejects_bad_arguments():
    assert main(["ticker"], client=client_with(FakeSession())) == 2
    assert main(["no_such_operation"], client=client_with(FakeSession())) == 2


def test_coerce_args_keeps_strings_except_price():
    assert coerce_args("cancel_order", ["15"]) == ["15"]
    assert coerce_args("place_order", ["BTC_USD", "buy", "1", "2.5"]) == ["BTC_USD", "buy", "1", 2.5]
