#!/usr/bin/env python3
"""
修复导出数据中的图片路径
将 https://boganto.com/uploads/xxx.jpg、/uploads/xxx.jpg 等统一为 uploads/xxx.jpg

Usage:
  python backend/fix_image_paths.py --data-dir exports/ [--dry-run]
"""
import argparse
import json
from pathlib import Path

from boganto.utils.image_paths import IMAGE_FIELDS, sanitize_record

DATA_DIR = Path(__file__).resolve().parent / "data"
COLLECTION_KEYS = ("blogs", "banners", "categories")


def _fix_records(records, changes):
    fixed = []
    for record in records:
        if not isinstance(record, dict):
            fixed.append(record)
            continue
        cleaned = sanitize_record(record)
        for field in IMAGE_FIELDS:
            if field in record and record[field] != cleaned[field]:
                changes.append((record[field], cleaned[field]))
        fixed.append(cleaned)
    return fixed


def fix_payload(data):
    """修复单个 JSON 文档，返回 (新文档, [(旧值, 新值), ...])"""
    changes = []
    if isinstance(data, list):
        return _fix_records(data, changes), changes
    if not isinstance(data, dict):
        return data, changes

    collections = [key for key in COLLECTION_KEYS if isinstance(data.get(key), list)]
    if not collections:
        return _fix_records([data], changes)[0], changes

    fixed = dict(data)
    for key in collections:
        fixed[key] = _fix_records(data[key], changes)
    return fixed, changes


def fix_file(file_path, dry_run=False):
    """修复单个文件，返回是否有改动"""
    try:
        data = json.loads(Path(file_path).read_text(encoding="utf-8"))
    except (OSError, ValueError) as e:
        print(f"  ✗ 读取失败: {e}")
        return False

    fixed, changes = fix_payload(data)
    for old, new in changes:
        print(f"  ✓ {old} -> {new}")

    if changes and not dry_run:
        Path(file_path).write_text(
            json.dumps(fixed, ensure_ascii=False, indent=2), encoding="utf-8"
        )
    return bool(changes)


def main(argv=None):
    parser = argparse.ArgumentParser(description="Normalize stored image paths in JSON exports.")
    parser.add_argument("--data-dir", default=str(DATA_DIR), help="directory containing *.json exports")
    parser.add_argument("--dry-run", action="store_true", help="only report, do not rewrite files")
    args = parser.parse_args(argv)

    print("=" * 60)
    print("修复导出数据中的图片路径")
    print("=" * 60)
    print()

    data_dir = Path(args.data_dir)
    if not data_dir.exists():
        print(f"❌ 数据目录不存在: {data_dir}")
        return 2

    export_files = sorted(data_dir.glob("*.json"))
    if not export_files:
        print(f"📁 数据目录为空: {data_dir}")
        return 0

    print(f"📂 找到 {len(export_files)} 个导出文件")
    print()

    fixed_count = 0
    for file_path in export_files:
        print(f"📄 处理: {file_path.name}")
        if fix_file(file_path, dry_run=args.dry_run):
            fixed_count += 1

    print()
    print("=" * 60)
    verb = "需要修复" if args.dry_run else "修复了"
    print(f"✅ 完成！{verb} {fixed_count} 个文件")
    print("=" * 60)
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
