import argparse
import logging
import os
import sys
from typing import List, Optional

from .config import load_settings
from .errors import Skin2HeadError
from .renderer import SkinRenderer
from .signature import SignatureValidator
from .skin_loader import SkinLoader

logger = logging.getLogger("skin2head")

RENDERS = ("head", "model")


def output_path_for(input_path: str, output: Optional[str], render: str) -> str:
    """
    Resolves where a rendering is saved.
    No output -> "<name>_<render>.png" in the current directory.
    Directory output -> same file name inside it.
    """
    base_name = os.path.basename(input_path.rstrip("/")).rsplit(".", 1)[0]
    file_name = f"{base_name}_{render}.png"
    if not output:
        return file_name
    if os.path.isdir(output) or output.endswith(os.sep):
        os.makedirs(output, exist_ok=True)
        return os.path.join(output, file_name)
    return output


def process_skin(source: str, output: Optional[str], render: str, zoom: Optional[int],
                 include_overlay: bool, loader: SkinLoader, renderer: SkinRenderer) -> bool:
    try:
        skin = loader.load_skin(source)
        if render == "head":
            result = renderer.render_head(skin, zoom, include_overlay)
        else:
            result = renderer.render_model(skin, zoom, include_overlay)

        final_output = output_path_for(source, output, render)
        result.to_image().save(final_output, format="PNG")
        print(f"Saved {render} of {source} to {final_output} ({result.width}x{result.height})")
        return True
    except (Skin2HeadError, ValueError) as e:
        logger.error("Error processing %s: %s", source, e)
        return False


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description="Render Minecraft skin heads and 2D models.")
    parser.add_argument("-i", "--input", required=True, help="Skin file, directory of skins, URL or player name")
    parser.add_argument("-o", "--output", help="Output file or directory")
    parser.add_argument("-r", "--render", default="head", choices=RENDERS, help="What to render")
    parser.add_argument("-z", "--zoom", type=int, help="Integer magnification (default: 8 for head, 2 for model)")
    parser.add_argument("--no-overlay", action="store_true", help="Skip the outer skin layer")
    parser.add_argument("--key", help="Session public key (DER or PEM) used to verify player textures")
    parser.add_argument("-v", "--verbose", action="store_true", help="Debug logging")
    return parser


def main(argv: Optional[List[str]] = None) -> int:
    args = build_parser().parse_args(argv)
    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.INFO,
        format="%(levelname)s %(name)s: %(message)s",
    )

    try:
        settings = load_settings()
        validator = SignatureValidator.from_file(args.key) if args.key else None
    except Skin2HeadError as e:
        logger.error("%s", e)
        return 1

    loader = SkinLoader(validator=validator)
    renderer = SkinRenderer(settings)

    input_path = args.input
    if os.path.isdir(input_path):
        files_to_process = sorted(
            os.path.join(input_path, f) for f in os.listdir(input_path) if f.lower().endswith(".png")
        )
        print(f"Found {len(files_to_process)} skins in directory.")
        if not files_to_process:
            return 1
        output = args.output
        if output:
            os.makedirs(output, exist_ok=True)
    else:
        files_to_process = [input_path]
        output = args.output

    success_count = 0
    for source in files_to_process:
        if process_skin(source, output, args.render, args.zoom, not args.no_overlay, loader, renderer):
            success_count += 1

    if len(files_to_process) > 1:
        print(f"\nBatch Complete. {success_count}/{len(files_to_process)} successful.")
    return 0 if success_count == len(files_to_process) else 1


if __name__ == "__main__":
    sys.exit(main())
