"""
CLI 명령어 처리 모듈

- 가격 계산 (price, order-calc)
- 점포/재고/주문 관리
- 설정 변경 및 일괄 재계산
- CSV/Excel 내보내기
"""

import argparse
import sys
from dataclasses import dataclass
from datetime import date
from pathlib import Path
from typing import Any, List, Optional

from ..core.config import AppConfig
from ..core.exceptions import InventoryAppError
from ..core.logging import setup_logger
from ..domain.logic import (
    calculate_converted_with_shipping,
    calculate_profit,
    calculate_selling_price,
)
from ..domain.reporting import filter_orders_by_month, summarize_inventory, summarize_orders
from ..export.exporters import StoreExcelExporter, export_inventory_csv, export_orders_csv
from ..repository import create_repository
from ..services.inventory_service import InventoryService
from ..utils.validators import DataValidator, require_valid_item, require_valid_settings


@dataclass
class CLIConfig:
    """CLI 설정"""
    verbose: bool = False
    output_dir: str = "output"
    no_color: bool = False


class ColorOutput:
    """컬러 출력 유틸리티"""

    COLORS = {
        "reset": "\033[0m",
        "red": "\033[91m",
        "green": "\033[92m",
        "yellow": "\033[93m",
        "cyan": "\033[96m",
        "bold": "\033[1m",
    }

    def __init__(self, enabled: bool = True):
        self.enabled = enabled and sys.stdout.isatty()

    def colorize(self, text: str, color: str) -> str:
        """텍스트에 색상 적용"""
        if not self.enabled or color not in self.COLORS:
            return text
        return f"{self.COLORS[color]}{text}{self.COLORS['reset']}"

    def success(self, text: str) -> str:
        return self.colorize(text, "green")

    def error(self, text: str) -> str:
        return self.colorize(text, "red")

    def warning(self, text: str) -> str:
        return self.colorize(text, "yellow")

    def info(self, text: str) -> str:
        return self.colorize(text, "cyan")

    def bold(self, text: str) -> str:
        return self.colorize(text, "bold")


class CLI:
    """Mercari Inventory CLI"""

    VERSION = "1.0.0"

    def __init__(self, config: CLIConfig = None):
        self.config = config or CLIConfig()
        self.color = ColorOutput(enabled=not self.config.no_color)

    def print_header(self, title: str):
        """섹션 헤더 출력"""
        print(f"\n{self.color.bold('='*60)}")
        print(f"  {self.color.info(title)}")
        print(f"{self.color.bold('='*60)}\n")

    def print_result(self, key: str, value: Any, indent: int = 2):
        """결과 출력"""
        spaces = " " * indent
        print(f"{spaces}{key}: {self.color.bold(str(value))}")

    def print_success(self, message: str):
        """성공 메시지"""
        print(f"\n✅ {self.color.success(message)}")

    def print_error(self, message: str):
        """에러 메시지"""
        print(f"\n❌ {self.color.error(message)}", file=sys.stderr)

    def print_warning(self, message: str):
        """경고 메시지"""
        print(f"\n⚠️ {self.color.warning(message)}")


def yen(value: int) -> str:
    return f"¥{value:,}"


def create_parser() -> argparse.ArgumentParser:
    """CLI 파서 생성"""
    parser = argparse.ArgumentParser(
        prog="mercari-inventory",
        description="중국 소싱 → 메르카리 판매 재고/주문 관리",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
예시:
  # 판매가 계산
  %(prog)s price --cost-cny 100

  # 주문 이익 계산
  %(prog)s order-calc --cost-cny 50 --payment 3000

  # 환율 변경 후 전체 재계산
  %(prog)s settings --exchange-rate 25 --recalculate

  # 월별 주문 CSV
  %(prog)s export <STORE_ID> --format csv --year 2026 --month 1
"""
    )

    parser.add_argument("-v", "--verbose", action="store_true", help="상세 출력 모드")
    parser.add_argument("--no-color", action="store_true", help="컬러 출력 비활성화")
    parser.add_argument("-o", "--output-dir", default="output", help="출력 디렉토리 (기본: output)")
    parser.add_argument("--data-dir", help="JSON 저장소 디렉토리 (기본: DATA_DIR 환경변수)")
    parser.add_argument("--version", action="version", version=f"%(prog)s {CLI.VERSION}")

    subparsers = parser.add_subparsers(dest="command", help="사용 가능한 명령어")

    # price 커맨드 (재고 판매가)
    price_parser = subparsers.add_parser("price", help="판매가 계산")
    price_parser.add_argument("--cost-cny", type=float, required=True, help="원가 (위안)")
    price_parser.add_argument("--exchange-rate", type=float, help="환율 (미지정 시 저장된 설정)")
    price_parser.add_argument("--international-shipping", type=int, help="국제 배송비 (엔)")
    price_parser.add_argument("--domestic-shipping", type=int, help="국내 배송비 (엔)")
    price_parser.add_argument("--target-profit", type=int, help="목표 이익 (엔)")
    price_parser.add_argument("--platform-fee-rate", type=float, help="수수료율 (0.22 = 22%%)")

    # order-calc 커맨드 (주문 이익)
    calc_parser = subparsers.add_parser("order-calc", help="주문 환산 원가/이익 계산")
    calc_parser.add_argument("--cost-cny", type=float, required=True, help="원가 (위안)")
    calc_parser.add_argument("--payment", type=int, required=True, help="실제 입금액 (엔)")
    calc_parser.add_argument("--exchange-rate", type=float, help="환율 (미지정 시 저장된 설정)")

    # 점포
    subparsers.add_parser("stores", help="점포 목록")
    store_add = subparsers.add_parser("store-add", help="점포 추가")
    store_add.add_argument("name", help="점포명")

    # 재고
    inventory_parser = subparsers.add_parser("inventory", help="재고 목록")
    inventory_parser.add_argument("store_id", help="점포 ID")

    inventory_add = subparsers.add_parser("inventory-add", help="재고 추가")
    inventory_add.add_argument("store_id", help="점포 ID")
    inventory_add.add_argument("--name", required=True, help="상품명")
    inventory_add.add_argument("--cost-cny", type=float, required=True, help="원가 (위안)")
    inventory_add.add_argument("--quantity", type=int, default=1, help="수량 (기본 1)")
    inventory_add.add_argument("--color", default="", help="색상")
    inventory_add.add_argument("--size", default="", help="사이즈")

    # 주문
    orders_parser = subparsers.add_parser("orders", help="월별 주문 목록")
    orders_parser.add_argument("store_id", help="점포 ID")
    orders_parser.add_argument("--year", type=int, help="연도 (기본: 올해)")
    orders_parser.add_argument("--month", type=int, help="월 (기본: 이번 달)")

    order_add = subparsers.add_parser("order-add", help="주문 추가")
    order_add.add_argument("store_id", help="점포 ID")
    order_add.add_argument("--name", required=True, help="상품명")
    order_add.add_argument("--cost-cny", type=float, required=True, help="원가 (위안)")
    order_add.add_argument("--payment", type=int, required=True, help="실제 입금액 (엔)")
    order_add.add_argument("--date", help="주문일 (ISO, 미지정 시 해당 월 15일)")
    order_add.add_argument("--year", type=int, help="주문 연도")
    order_add.add_argument("--month", type=int, help="주문 월")
    order_add.add_argument("--color", default="", help="색상")
    order_add.add_argument("--size", default="", help="사이즈")

    # 설정
    settings_parser = subparsers.add_parser("settings", help="설정 조회/변경")
    settings_parser.add_argument("--exchange-rate", type=float, help="환율 (CNY → JPY)")
    settings_parser.add_argument("--international-shipping", type=int, help="국제 배송비 (엔)")
    settings_parser.add_argument("--domestic-shipping", type=int, help="국내 배송비 (엔)")
    settings_parser.add_argument("--target-profit", type=int, help="목표 이익 (엔)")
    settings_parser.add_argument("--platform-fee-rate", type=float, help="수수료율")
    settings_parser.add_argument("--recalculate", action="store_true", help="변경 후 전체 재계산")

    subparsers.add_parser("recalc", help="전체 가격 재계산")

    # 내보내기
    export_parser = subparsers.add_parser("export", help="CSV/Excel 내보내기")
    export_parser.add_argument("store_id", help="점포 ID")
    export_parser.add_argument("--format", choices=["csv", "xlsx"], default="csv", help="출력 형식")
    export_parser.add_argument("--year", type=int, help="주문 연도 필터")
    export_parser.add_argument("--month", type=int, help="주문 월 필터")

    return parser


SETTINGS_ARGS = (
    "exchange_rate",
    "international_shipping",
    "domestic_shipping",
    "target_profit",
    "platform_fee_rate",
)


def _settings_overrides(args) -> dict:
    return {
        name: getattr(args, name)
        for name in SETTINGS_ARGS
        if getattr(args, name, None) is not None
    }


def _require_cost(cost_cny: float):
    """원가는 0 이상 (NaN, inf 제외)"""
    result = DataValidator.non_negative(cost_cny, "cost_price_cny")
    require_valid_item(result, {"cost_price_cny": cost_cny})


def cmd_price(args, cli: CLI, service: InventoryService):
    """판매가 계산"""
    _require_cost(args.cost_cny)
    settings = require_valid_settings(service.get_settings().merged(**_settings_overrides(args)))
    price = calculate_selling_price(args.cost_cny, settings)

    cli.print_header("💴 판매가 계산")
    cli.print_result("원가", f"{args.cost_cny} CNY")
    cli.print_result("환율", settings.exchange_rate)
    cli.print_result("배송비", f"{yen(settings.international_shipping)} + {yen(settings.domestic_shipping)}")
    cli.print_result("목표 이익", yen(settings.target_profit))
    cli.print_result("수수료율", f"{settings.platform_fee_rate * 100:.1f}%")
    cli.print_result("판매가", yen(price))


def cmd_order_calc(args, cli: CLI, service: InventoryService):
    """주문 환산 원가와 이익 계산"""
    _require_cost(args.cost_cny)
    settings = require_valid_settings(service.get_settings().merged(**_settings_overrides(args)))
    converted = calculate_converted_with_shipping(args.cost_cny, settings.exchange_rate)
    profit = calculate_profit(args.payment, converted)

    cli.print_header("🧾 주문 이익 계산")
    cli.print_result("환산 원가+배송비", yen(converted))
    cli.print_result("실제 입금액", yen(args.payment))
    cli.print_result("이익", yen(profit))
    if profit < 0:
        cli.print_warning("적자 주문입니다.")


def cmd_stores(args, cli: CLI, service: InventoryService):
    """점포 목록"""
    service.ensure_default_store()
    cli.print_header("🏪 점포 목록")
    for store in service.list_stores():
        cli.print_result(store.name, f"{store.id} (재고 {len(store.inventory)} / 주문 {len(store.orders)})")


def cmd_store_add(args, cli: CLI, service: InventoryService):
    store = service.add_store(args.name)
    cli.print_success(f"점포 추가: {store.name} ({store.id})")


def cmd_inventory(args, cli: CLI, service: InventoryService):
    """재고 목록과 요약"""
    store = service.get_store(args.store_id)
    cli.print_header(f"📦 {store.name} 재고")
    for item in store.inventory:
        variant = " / ".join(v for v in (item.color, item.size) if v)
        label = f"{item.product_name} ({variant})" if variant else item.product_name
        cli.print_result(label, f"{item.quantity}개 · {item.cost_price_cny} CNY → {yen(item.selling_price_jpy)}")

    summary = summarize_inventory(store.inventory)
    print()
    cli.print_result("상품 종류", summary.product_kinds)
    cli.print_result("총 재고 수", summary.total_quantity)
    cli.print_result("총 원가 (CNY)", f"{summary.total_cost_cny:,.2f}")


def cmd_inventory_add(args, cli: CLI, service: InventoryService):
    item = service.add_inventory_item(
        args.store_id,
        product_name=args.name,
        cost_price_cny=args.cost_cny,
        quantity=args.quantity,
        color=args.color,
        size=args.size,
    )
    cli.print_success(f"재고 추가: {item.product_name} → {yen(item.selling_price_jpy)} ({item.id})")


def cmd_orders(args, cli: CLI, service: InventoryService):
    """월별 주문 목록과 합계"""
    today = date.today()
    year = args.year or today.year
    month = args.month or today.month

    store = service.get_store(args.store_id)
    summary = summarize_orders(store.orders, year, month)

    cli.print_header(f"🧾 {store.name} {year}年{month}月 注文")
    for order in filter_orders_by_month(store.orders, year, month):
        cli.print_result(order.product_name, f"{yen(order.actual_payment)} - {yen(order.converted_with_shipping)} = {yen(order.profit)}")

    print()
    cli.print_result("주문 수", summary.order_count)
    cli.print_result("매출 합계", yen(summary.total_revenue))
    cli.print_result("원가 합계", yen(summary.total_cost))
    cli.print_result("이익 합계", yen(summary.total_profit))


def cmd_order_add(args, cli: CLI, service: InventoryService):
    order = service.add_order(
        args.store_id,
        product_name=args.name,
        cost_price_cny=args.cost_cny,
        actual_payment=args.payment,
        color=args.color,
        size=args.size,
        created_at=args.date,
        year=args.year,
        month=args.month,
    )
    cli.print_success(f"주문 추가: {order.product_name} 이익 {yen(order.profit)} ({order.id})")


def cmd_settings(args, cli: CLI, service: InventoryService):
    """설정 조회/변경"""
    changes = _settings_overrides(args)
    if changes:
        settings = service.update_settings(recalculate=args.recalculate, **changes)
        cli.print_success("설정을 변경했습니다.")
    else:
        settings = service.get_settings()

    cli.print_header("⚙️ 설정")
    for key, value in settings.to_dict().items():
        cli.print_result(key, value)

    if changes and not args.recalculate:
        cli.print_warning("기존 재고/주문에 반영하려면 recalc를 실행하세요.")


def cmd_recalc(args, cli: CLI, service: InventoryService):
    report = service.recalculate_all_prices()
    cli.print_success(
        f"재계산 완료: 재고 {report.inventory_updated}/{report.inventory_checked}, "
        f"주문 {report.orders_updated}/{report.orders_checked}"
    )


def cmd_export(args, cli: CLI, service: InventoryService):
    """CSV/Excel 내보내기"""
    store = service.get_store(args.store_id)
    output_dir = Path(cli.config.output_dir)

    if args.format == "xlsx":
        path = StoreExcelExporter().export(
            store,
            str(output_dir / f"{store.name}_{date.today().isoformat()}.xlsx"),
            year=args.year,
            month=args.month,
        )
        cli.print_success(f"엑셀 저장: {path}")
        return

    inventory_path = export_inventory_csv(store.inventory, store.name, str(output_dir))
    orders_path = export_orders_csv(store.orders, store.name, str(output_dir), year=args.year, month=args.month)
    cli.print_success(f"CSV 저장: {inventory_path}, {orders_path}")


COMMANDS = {
    "price": cmd_price,
    "order-calc": cmd_order_calc,
    "stores": cmd_stores,
    "store-add": cmd_store_add,
    "inventory": cmd_inventory,
    "inventory-add": cmd_inventory_add,
    "orders": cmd_orders,
    "order-add": cmd_order_add,
    "settings": cmd_settings,
    "recalc": cmd_recalc,
    "export": cmd_export,
}


def run_cli(argv: Optional[List[str]] = None, service: Optional[InventoryService] = None) -> int:
    """CLI 실행

    Returns:
        종료 코드 (0: 성공, 1: 오류)
    """
    parser = create_parser()
    args = parser.parse_args(argv)

    config = CLIConfig(
        verbose=args.verbose,
        output_dir=args.output_dir,
        no_color=args.no_color
    )
    cli = CLI(config)

    handler = COMMANDS.get(args.command)
    if handler is None:
        # 명령어 없으면 도움말
        parser.print_help()
        return 0

    try:
        if service is None:
            app_config = AppConfig.from_env()
            if args.data_dir:
                app_config.data_dir = Path(args.data_dir)
            logger = setup_logger(level="DEBUG" if args.verbose else app_config.log_level)
            service = InventoryService(
                create_repository(app_config),
                logger=logger,
                default_store_name=app_config.default_store_name,
            )
        handler(args, cli, service)
    except InventoryAppError as e:
        cli.print_error(str(e))
        return 1
    return 0


if __name__ == "__main__":
    sys.exit(run_cli())
