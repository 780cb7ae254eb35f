"""
数据格式化工具

提供估算结果和探测进度的格式化功能。
"""

import json
from typing import Dict, Any, List
from tabulate import tabulate


STATUS_LABELS = {
    "ok": "成功",
    "oog": "耗尽",
}


def format_results(results: List[Dict[str, Any]], format_type: str = "table",
                   verbose: bool = False) -> str:
    """
    格式化估算结果

    Args:
        results: 估算结果字典列表（EstimationResult.to_dict()）
        format_type: 输出格式 ("table", "json", "csv")
        verbose: 是否显示每次探测的详细信息

    Returns:
        格式化后的字符串
    """
    if format_type == "json":
        return json.dumps(results, indent=2, ensure_ascii=False)

    elif format_type == "csv":
        return format_results_csv(results)

    else:  # table format
        return format_results_table(results, verbose)


def format_results_table(results: List[Dict[str, Any]], verbose: bool = False) -> str:
    """格式化为表格形式"""
    lines = []
    lines.append("=== gas上限估算结果 ===\n")

    data = []
    for result in results:
        data.append([
            result["work_id"],
            f"{result['limit']:,}",
            result["iterations"],
            STATUS_LABELS.get(result["status"], result["status"]),
        ])

    headers = ["工作单元", "gas上限", "探测次数", "状态"]
    lines.append(tabulate(data, headers=headers, tablefmt="grid"))

    if verbose:
        for result in results:
            probes = result.get("probes")
            if not probes:
                continue
            lines.append(f"\n{result['work_id']} 探测过程:")
            lines.append(format_probe_table(probes))

    return "\n".join(lines)


def format_probe_table(probes: List[Dict[str, Any]]) -> str:
    """格式化探测过程"""
    data = [
        [
            probe["iteration"],
            f"{probe['low']:,}",
            f"{probe['mid']:,}",
            f"{probe['high']:,}",
            STATUS_LABELS.get(probe["status"], probe["status"]),
            f"{probe['consumed']:,}",
        ]
        for probe in probes
    ]
    headers = ["#", "low", "mid", "high", "结果", "消耗"]
    return tabulate(data, headers=headers, tablefmt="simple")


def format_results_csv(results: List[Dict[str, Any]]) -> str:
    """格式化为CSV形式"""
    csv_lines = []

    headers = ["work_id", "limit", "iterations", "status"]
    csv_lines.append(",".join(headers))

    for result in results:
        values = [
            str(result.get("work_id", "")),
            str(result.get("limit", 0)),
            str(result.get("iterations", 0)),
            result.get("status", ""),
        ]
        csv_lines.append(",".join(values))

    return "\n".join(csv_lines)


def format_probe_line(probe: Dict[str, Any]) -> str:
    """单行探测进度"""
    return (
        f"probe {probe['work_id']}[{probe['iteration']}x, low: {probe['low']}, "
        f"mid: {probe['mid']} high: {probe['high']}] => result {probe['status']}: "
        f"used {probe['consumed']}"
    )
