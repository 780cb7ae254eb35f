#!/usr/bin/env python3
"""
测试命令行接口
"""

import json

import pytest
from click.testing import CliRunner

from gas_estimate.cli.commands import build_settings, cli
from gas_estimate.config.settings import config_manager


@pytest.fixture
def runner():
    return CliRunner()


class TestEstimateCommand:
    """测试 estimate 命令"""

    def test_json_output(self, runner):
        result = runner.invoke(cli, ["estimate", "-w", "contract-0", "-w", "contract-3", "-f", "json"])

        assert result.exit_code == 0, result.output
        data = json.loads(result.output)
        assert [item["limit"] for item in data] == [25500, 1750000]
        assert all(item["status"] == "ok" for item in data)

    def test_table_output(self, runner):
        result = runner.invoke(cli, ["estimate", "-w", "contract-1"])

        assert result.exit_code == 0, result.output
        assert "104,560" in result.output
        assert "成功" in result.output

    def test_csv_output(self, runner):
        result = runner.invoke(cli, ["estimate", "-w", "contract-2", "-f", "csv"])

        assert result.exit_code == 0, result.output
        lines = result.output.strip().splitlines()
        assert lines[0] == "work_id,limit,iterations,status"
        assert lines[1] == "contract-2,28750,6,ok"

    def test_trace(self, runner):
        result = runner.invoke(cli, ["estimate", "-w", "contract-0", "--trace", "-f", "csv"])

        assert result.exit_code == 0, result.output
        assert "probe contract-0[1x, low: 21000, mid: 15000000 high: 15000000] => result ok: used 24000" \
            in result.output
        assert result.output.count("probe contract-0[") == 7

    def test_verbose_includes_probes(self, runner):
        result = runner.invoke(cli, ["estimate", "-w", "contract-0", "-v", "-f", "json"])

        assert result.exit_code == 0, result.output
        data = json.loads(result.output)
        assert len(data[0]["probes"]) == 7

    def test_custom_contract(self, runner):
        result = runner.invoke(cli, ["estimate", "-w", "swap", "--contract", "swap:50000:65000",
                                     "-f", "json"])

        assert result.exit_code == 0, result.output
        data = json.loads(result.output)
        assert 65000 <= data[0]["limit"] <= 65000 / 0.9

    def test_exhausted_at_ceiling(self, runner):
        result = runner.invoke(cli, ["estimate", "-w", "contract-3", "--max-limit", "1000000",
                                     "-f", "json"])

        assert result.exit_code == 0, result.output
        data = json.loads(result.output)
        assert data[0] == {"work_id": "contract-3", "iterations": 1, "limit": 1000000, "status": "oog"}

    def test_unknown_work_unit(self, runner):
        result = runner.invoke(cli, ["estimate", "-w", "contract-99"])

        assert result.exit_code == 1
        assert "Unknown work unit: contract-99" in result.output

    def test_invalid_bounds(self, runner):
        result = runner.invoke(cli, ["estimate", "-w", "contract-0", "--min-limit", "20000000"])

        assert result.exit_code == 1
        assert "错误" in result.output

    def test_output_file(self, runner, tmp_path):
        output_file = tmp_path / "result.json"
        result = runner.invoke(cli, ["estimate", "-w", "contract-0", "-f", "json",
                                     "--output-file", str(output_file)])

        assert result.exit_code == 0, result.output
        assert json.loads(output_file.read_text(encoding="utf-8"))[0]["limit"] == 25500

    def test_strategy_option(self, runner):
        result = runner.invoke(cli, ["estimate", "-w", "contract-0", "-s", "bisection", "-f", "json"])

        assert result.exit_code == 0, result.output
        data = json.loads(result.output)
        assert data[0]["iterations"] > 7


class TestRunAllCommand:
    """测试 run-all 命令"""

    def test_runs_every_contract(self, runner):
        result = runner.invoke(cli, ["run-all", "-f", "csv"])

        assert result.exit_code == 0, result.output
        assert "========== contract-0: used 24000, required: 24000" in result.output
        assert "contract-1: gas 104560, iterations: 13: ok" in result.output
        assert "contract-3: gas 1750000, iterations: 6: ok" in result.output
        assert "probe contract-2[" in result.output

    def test_no_trace(self, runner):
        result = runner.invoke(cli, ["run-all", "--no-trace", "-f", "csv"])

        assert result.exit_code == 0, result.output
        assert "probe contract-" not in result.output
        assert "contract-2,28750,6,ok" in result.output

    def test_verify(self, runner):
        result = runner.invoke(cli, ["run-all", "--no-trace", "--verify", "-f", "csv"])

        assert result.exit_code == 0, result.output
        assert "contract-2,28750,7,ok" in result.output


class TestListCommands:
    """测试列表命令"""

    def test_list_contracts(self, runner):
        result = runner.invoke(cli, ["list-contracts"])

        assert result.exit_code == 0, result.output
        assert "contract-3" in result.output
        assert "1,750,000" in result.output

    def test_list_contracts_with_extra(self, runner):
        result = runner.invoke(cli, ["list-contracts", "--contract", "swap:50000:65000"])

        assert result.exit_code == 0, result.output
        assert "swap" in result.output

    def test_list_strategies(self, runner):
        result = runner.invoke(cli, ["list-strategies"])

        assert result.exit_code == 0, result.output
        assert "consumption" in result.output
        assert "bisection" in result.output

    def test_show_config(self, runner):
        result = runner.invoke(cli, ["show-config"])

        assert result.exit_code == 0, result.output
        assert json.loads(result.output)["max_limit"] == 15000000


class TestBuildSettings:
    """测试命令行参数合并"""

    def test_overrides(self):
        settings = build_settings(max_limit=1000000, strategy="bisection")
        assert settings.max_limit == 1000000
        assert settings.priming_strategy == "bisection"
        assert settings.min_limit == 21000

    def test_keeps_global_settings(self):
        config_manager.update_settings(verify_limit=True)
        assert build_settings(verify=False).verify_limit is True
