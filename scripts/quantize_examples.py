import argparse
import logging
from pathlib import Path
from palettecut.config import (
    EXAMPLES_DIR, OUTPUTS_DIR, HISTOGRAM_BITS, COLOR_QUANT_METHOD, MEDIAN_CUT_COLORS, DEFAULT_JPEG_QUALITY
)
from palettecut.io_utils import list_images, load_image, save_image_rgb, save_indexed_png
from palettecut.metrics.similarity import quantization_report
from palettecut.preprocessing.color_quantization import quantize, quantize_indexed

def main():
    parser = argparse.ArgumentParser(description="Reduce example images to a median cut palette.")
    parser.add_argument("--examples", type=str, default=str(EXAMPLES_DIR), help="Folder with input images")
    parser.add_argument("--out", type=str, default=str(OUTPUTS_DIR / "quantized"), help="Output folder")
    parser.add_argument("--quant", type=str, default=COLOR_QUANT_METHOD, choices=["none", "median_cut"])
    parser.add_argument("--colors", type=int, default=MEDIAN_CUT_COLORS, help="Maximum palette size")
    parser.add_argument("--bits", type=int, nargs=3, default=list(HISTOGRAM_BITS), metavar=("R", "G", "B"),
                        help="Histogram bits kept per channel")
    parser.add_argument("--indexed", action="store_true", help="Write paletted PNGs instead of RGB images")
    parser.add_argument("--report", action="store_true", help="Print MSE/PSNR/SSIM against the original")
    parser.add_argument("--quality", type=int, default=DEFAULT_JPEG_QUALITY)
    parser.add_argument("-v", "--verbose", action="store_true")
    args = parser.parse_args()

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.INFO,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )

    out_dir = Path(args.out)
    out_dir.mkdir(parents=True, exist_ok=True)

    failed = 0
    for img_path in list_images(args.examples):
        try:
            img = load_image(img_path, keep_alpha=True)
            stem = img_path.stem

            if args.indexed:
                indices, palette = quantize_indexed(img, max_colors=args.colors, histogram_bits=args.bits)
                dst = save_indexed_png(out_dir / f"{stem}_{args.colors}c.png", indices, palette)
                quant = palette[indices]
            else:
                quant = quantize(img, method=args.quant, median_cut_colors=args.colors, histogram_bits=args.bits)
                dst = save_image_rgb(out_dir / f"{stem}_{args.colors}c{img_path.suffix}", quant, quality=args.quality)
            print(f"✓ {img_path.name} -> {dst.name}")

            if args.report:
                rep = quantization_report(img, quant)
                print(f"  ↳ colors={int(rep['colors'])} mse={rep['mse']:.2f} "
                      f"psnr={rep['psnr']:.2f}dB ssim={rep['ssim']:.4f}")
        except (OSError, ValueError, TypeError) as e:
            failed += 1
            print(f"✗ {img_path.name}: {e}")

    if failed:
        raise SystemExit(1)


if __name__ == "__main__":
    main()
