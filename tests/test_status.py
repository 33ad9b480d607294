"""
Tests for the status script output.
"""

import json
from unittest.mock import patch, MagicMock

import pytest

import LidlConnectStatus


def test_main_prints_single_json_document(capsys):
    lidl = MagicMock()
    lidl.getConsumptions.return_value = [{"consumed": 40, "left": 60, "max": 100, "ConsumedPercent": 40.0, "LeftPercent": 60.0, "DaysLeft": 10.0}]
    lidl.getBalance.return_value = 1234
    lidl.getTariff.return_value = {"Name": "Smart S", "Fee": 799, "RenewDate": "2026-11-01T00:00:00Z"}

    with patch("LidlConnectStatus.loadConfiguration", return_value={"username": "u"}) as mock_load, \
         patch("LidlConnectStatus.LidlConnect", return_value=lidl) as mock_class:
        LidlConnectStatus.main()

    mock_load.assert_called_once_with()
    mock_class.assert_called_once_with({"username": "u"})

    captured = capsys.readouterr()
    output = json.loads(captured.out)
    assert list(output) == ["Consumptions", "Balance", "Tariff"]
    assert output["Consumptions"][0]["ConsumedPercent"] == 40
    assert output["Balance"] == 1234
    assert output["Tariff"]["Name"] == "Smart S"
    assert "* Logging into Lidl Connect." in captured.err


def test_main_writes_nothing_to_stdout_when_a_fetch_fails(capsys):
    lidl = MagicMock()
    lidl.getConsumptions.return_value = []
    lidl.getBalance.side_effect = ValueError("Lidl Connect balanceInfo query failed (Unauthorized).")

    with patch("LidlConnectStatus.loadConfiguration", return_value={"username": "u"}), \
         patch("LidlConnectStatus.LidlConnect", return_value=lidl):
        with pytest.raises(ValueError, match="balanceInfo"):
            LidlConnectStatus.main()

    assert capsys.readouterr().out == ""
