"""
CLI命令实现

提供命令行界面的具体命令实现。
工作单元来自内置合约表，可通过 --contract 追加。
"""

import click
import json
from typing import Optional, List, Tuple
from tabulate import tabulate

from ..config.settings import Settings, get_settings
from ..errors import EstimationError
from ..estimator.base import GasEstimator, EstimationResult, ProbeRecord
from ..estimator.priming import list_priming_strategies
from ..oracle.table import create_table_oracle, list_supported_contracts
from ..utils.formatters import format_results, format_probe_line
from ..utils.log import setup_logging


@click.group()
@click.version_option(version="0.1.0", prog_name="gas-estimate")
@click.option("--log-level", default=None,
              type=click.Choice(["DEBUG", "INFO", "WARNING", "ERROR"], case_sensitive=False),
              help="日志级别")
def cli(log_level: Optional[str]):
    """gas上限估算工具

    反复探测执行环境，自适应地搜索让合约调用成功的最小gas上限。
    """
    setup_logging(log_level or get_settings().log_level)


def search_options(func):
    """估算命令共用的搜索参数"""
    options = [
        click.option("--min-limit", type=int, help="最小gas上限"),
        click.option("--max-limit", type=int, help="最大gas上限"),
        click.option("--tolerance-divisor", type=int,
                     help="收敛容差：区间宽度不超过 high/N 时停止"),
        click.option("--strategy", "-s", type=click.Choice(list_priming_strategies()),
                     help="预热策略"),
        click.option("--multiplier", type=int, help="消耗量倍数（consumption策略）"),
        click.option("--verify", is_flag=True, help="收敛后复测结果上限"),
        click.option("--contract", "contracts", multiple=True,
                     help="追加合约定义 NAME:USED:REQUIRED，可重复"),
        click.option("--format", "-f", "output_format", default=None,
                     type=click.Choice(["table", "json", "csv"]), help="输出格式"),
        click.option("--output-file", type=click.Path(), help="输出文件路径"),
    ]
    for option in reversed(options):
        func = option(func)
    return func


def build_settings(min_limit: Optional[int] = None,
                   max_limit: Optional[int] = None,
                   tolerance_divisor: Optional[int] = None,
                   strategy: Optional[str] = None,
                   multiplier: Optional[int] = None,
                   verify: Optional[bool] = None) -> Settings:
    """在全局设置基础上应用命令行参数"""
    overrides = {
        "min_limit": min_limit,
        "max_limit": max_limit,
        "tolerance_divisor": tolerance_divisor,
        "priming_strategy": strategy,
        "priming_multiplier": multiplier,
        "verify_limit": verify or None,
    }
    values = get_settings().model_dump()
    values.update({key: value for key, value in overrides.items() if value is not None})
    return Settings(**values)


def run_estimations(estimator: GasEstimator, work_ids: List[str]) -> List[EstimationResult]:
    """依次估算每个工作单元"""
    return [estimator.estimate(work_id) for work_id in work_ids]


def echo_probe(record: ProbeRecord) -> None:
    click.echo(format_probe_line(record.to_dict()))


def write_output(text: str, output_file: Optional[str]) -> None:
    if output_file:
        with open(output_file, 'w', encoding='utf-8') as f:
            f.write(text)
        click.echo(f"结果已保存到: {output_file}")
    else:
        click.echo(text)


@cli.command()
@click.option("--work-id", "-w", "work_ids", multiple=True, required=True, help="工作单元（合约名称），可重复")
@click.option("--trace", "-t", is_flag=True, help="输出每次探测的进度")
@click.option("--verbose", "-v", is_flag=True, help="在结果中包含探测过程")
@search_options
def estimate(work_ids: Tuple[str, ...], trace: bool, verbose: bool,
             min_limit: Optional[int], max_limit: Optional[int],
             tolerance_divisor: Optional[int], strategy: Optional[str],
             multiplier: Optional[int], verify: Optional[bool],
             contracts: Tuple[str, ...], output_format: Optional[str],
             output_file: Optional[str]):
    """估算指定合约调用所需的gas上限"""

    try:
        settings = build_settings(min_limit, max_limit, tolerance_divisor,
                                  strategy, multiplier, verify)
        oracle = create_table_oracle(contracts)
        estimator = GasEstimator(oracle, settings, trace=echo_probe if trace else None)

        results = run_estimations(estimator, list(work_ids))

        output_format = output_format or settings.default_output_format
        data = [result.to_dict(include_probes=verbose) for result in results]
        write_output(format_results(data, output_format, verbose), output_file)

    except (EstimationError, ValueError) as e:
        click.echo(f"错误: {e}", err=True)
        raise click.Abort()


@cli.command("run-all")
@click.option("--trace/--no-trace", default=True, help="输出每次探测的进度")
@search_options
def run_all(trace: bool, min_limit: Optional[int], max_limit: Optional[int],
            tolerance_divisor: Optional[int], strategy: Optional[str],
            multiplier: Optional[int], verify: Optional[bool],
            contracts: Tuple[str, ...], output_format: Optional[str],
            output_file: Optional[str]):
    """估算合约表中的所有合约"""

    try:
        settings = build_settings(min_limit, max_limit, tolerance_divisor,
                                  strategy, multiplier, verify)
        oracle = create_table_oracle(contracts)
        estimator = GasEstimator(oracle, settings, trace=echo_probe if trace else None)

        results = []
        for work_id in oracle.work_ids():
            specs = oracle.get_specs(work_id)
            click.echo(f"========== {work_id}: used {specs.used}, required: {specs.required}")
            result = estimator.estimate(work_id)
            click.echo(f"{work_id}: gas {result.limit}, iterations: {result.iterations}: "
                       f"{result.status.value}")
            results.append(result)

        output_format = output_format or settings.default_output_format
        data = [result.to_dict() for result in results]
        write_output(format_results(data, output_format), output_file)

    except (EstimationError, ValueError) as e:
        click.echo(f"错误: {e}", err=True)
        raise click.Abort()


@cli.command("list-contracts")
@click.option("--contract", "contracts", multiple=True, help="追加合约定义 NAME:USED:REQUIRED")
def list_contracts(contracts: Tuple[str, ...]):
    """列出合约表"""
    if contracts:
        try:
            oracle = create_table_oracle(contracts)
        except ValueError as e:
            click.echo(f"错误: {e}", err=True)
            raise click.Abort()
        table = {
            work_id: {"used": specs.used, "required": specs.required}
            for work_id, specs in oracle.contracts.items()
        }
    else:
        table = list_supported_contracts()

    data = [[name, f"{info['used']:,}", f"{info['required']:,}"] for name, info in table.items()]
    headers = ["合约名称", "实际消耗", "所需上限"]
    click.echo(tabulate(data, headers=headers, tablefmt="grid"))


@cli.command("list-strategies")
def list_strategies():
    """列出支持的预热策略"""
    click.echo("支持的预热策略:")
    for name in list_priming_strategies():
        click.echo(f"  - {name}")


@cli.command("show-config")
def show_config():
    """显示当前配置"""
    click.echo(json.dumps(get_settings().model_dump(), indent=2, ensure_ascii=False))


def main():
    """主程序入口"""
    cli()


if __name__ == "__main__":
    main()
