#!/usr/bin/env python3
"""
gas-estimate 基本使用示例

演示如何用自定义预言机估算合约调用的gas上限。
"""

import sys
import os

# 添加项目根目录到路径
sys.path.insert(0, os.path.join(os.path.dirname(__file__), '..', '..'))

from gas_estimate import (
    GasEstimator,
    MonotonicityViolation,
    Oracle,
    ProbeOutcome,
    Settings,
    create_table_oracle,
)


class LinearOracle(Oracle):
    """所需gas随输入长度线性增长的示例预言机"""

    BASE_COST = 21000
    COST_PER_BYTE = 16

    def probe(self, work_id, limit):
        required = self.BASE_COST + self.COST_PER_BYTE * len(work_id)
        if limit >= required:
            return ProbeOutcome.success(required)
        return ProbeOutcome.exhausted(limit)


def main():
    """主函数"""
    print("=== gas-estimate 基本使用示例 ===\n")

    # 1. 使用内置合约表
    oracle = create_table_oracle()
    estimator = GasEstimator(oracle, Settings())
    for work_id in oracle.work_ids():
        result = estimator.estimate(work_id)
        print(f"{work_id}: gas {result.limit}, 探测 {result.iterations} 次, {result.status.value}")
    print()

    # 2. 自定义预言机，并打印每次探测
    def show(record):
        print(f"  #{record.iteration}: [{record.low}, {record.mid}, {record.high}] -> {record.status.value}")

    estimator = GasEstimator(LinearOracle(), Settings(tolerance_divisor=100), trace=show)
    try:
        result = estimator.estimate(b"\x00" * 4096)
        print(f"4096字节调用数据: gas {result.limit}")
    except MonotonicityViolation as e:
        print(f"估算失败: {e}")

    print("\n=== 示例完成 ===")


if __name__ == "__main__":
    main()
