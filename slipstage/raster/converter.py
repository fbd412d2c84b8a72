from pathlib import Path

from PIL import Image, ImageOps, UnidentifiedImageError

from slipstage.logging.logger import Log
from slipstage.raster.base import BaseRasterTool
from slipstage.raster.exceptions import RasterToolError

# Formats Pillow cannot decode; these go through the external tool instead.
_TOOL_DECODED_EXTENSIONS = frozenset({"svg"})


def page_tile_name(base_name: str, page_index: int) -> str:
    return f"{base_name}_p{page_index}.jpg"


class RasterConverter:
    """Turns paginated documents and non-JPEG images into JPEG tiles."""

    def __init__(self, tool: BaseRasterTool, *, density: int = 300) -> None:
        self._tool = tool
        self._density = density

    def convert_document(
        self,
        source: Path,
        page_count: int,
        output_dir: Path,
        base_name: str,
        *,
        single_output: bool,
    ) -> list[Path]:
        """Rasterize every page of ``source`` into ``output_dir``, in page order.

        With ``single_output`` the one page is written as ``<base_name>.jpg``;
        otherwise each page is named after its zero-based index. A failing
        page stops the loop; pages already written stay on disk.

        Raises:
            RasterToolError: on the first page that fails.
        """
        if single_output and page_count != 1:
            raise ValueError(f"single_output requires exactly one page, got {page_count}")

        tiles: list[Path] = []
        for page_index in range(page_count):
            name = f"{base_name}.jpg" if single_output else page_tile_name(base_name, page_index)
            output_path = output_dir / name
            Log.info(
                "RasterConverter",
                f"[Page {page_index + 1}/{page_count}] {source}[{page_index}] -> {output_path}",
            )
            try:
                tiles.append(
                    self._tool.convert_page(source, page_index, output_path, self._density)
                )
            except RasterToolError as exc:
                Log.error("RasterConverter", str(exc))
                raise
        Log.info("RasterConverter", f"Converted {len(tiles)} page(s) of {source.name}")
        return tiles

    def convert_image(self, source: Path, output_path: Path) -> Path:
        """Re-encode a single non-JPEG image as JPEG at ``output_path``.

        Transparent areas are flattened onto white; animated images keep
        their first frame.
        """
        extension = source.suffix.lstrip(".").lower()
        if extension in _TOOL_DECODED_EXTENSIONS:
            return self._convert_with_tool(source, output_path)
        try:
            with Image.open(source) as image:
                self._to_rgb(image).save(output_path, format="JPEG", quality=95)
        except UnidentifiedImageError:
            Log.warning(
                "RasterConverter",
                f"Pillow cannot decode {source.name}, using the raster tool",
            )
            return self._convert_with_tool(source, output_path)
        Log.info("RasterConverter", f"Re-encoded {source.name} -> {output_path}")
        return output_path

    def _convert_with_tool(self, source: Path, output_path: Path) -> Path:
        try:
            return self._tool.convert_page(source, 0, output_path, self._density)
        except RasterToolError as exc:
            Log.error("RasterConverter", str(exc))
            raise

    @staticmethod
    def _to_rgb(image: Image.Image) -> Image.Image:
        image.seek(0)
        image = ImageOps.exif_transpose(image)
        if image.mode in ("RGBA", "LA") or (image.mode == "P" and "transparency" in image.info):
            rgba = image.convert("RGBA")
            background = Image.new("RGB", rgba.size, "white")
            background.paste(rgba, mask=rgba.getchannel("A"))
            return background
        return image.convert("RGB")
