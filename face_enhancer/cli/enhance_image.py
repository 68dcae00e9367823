import argparse
import logging
import os
import sys
from pathlib import Path
from typing import List, Optional
from dotenv import load_dotenv

# Load environment variables first
load_dotenv()

from ..errors import DetectorLoadError, ImageDecodeError, ImageEncodeError, ModelNotFoundError
from ..models.enhancement_parameters import EnhancementParameters
from ..pipeline.enhance_face import enhance_face
from ..repositories.detector_repository import DetectorRepository
from ..repositories.upsampling_model_repository import UpsamplingModelRepository
from ..services.image_service import ImageService

logger = logging.getLogger(__name__)

EXIT_OK = 0
EXIT_USAGE = 1
EXIT_UNREADABLE_INPUT = 2
EXIT_DETECTOR_LOAD = 3
EXIT_WRITE_FAILED = 4


def build_argparser() -> argparse.ArgumentParser:
    p = argparse.ArgumentParser(
        prog="face-enhance",
        description="Enhance the largest face in a photo and blend it back seamlessly",
    )
    p.add_argument("--input", required=True, help="Path to the input image")
    p.add_argument("--output", default="enhanced.png", help="Where to write the result")
    p.add_argument("--cascade", default=os.getenv("FACE_CASCADE_PATH"),
                   help="Haar cascade XML (defaults to OpenCV's frontal-face cascade)")
    p.add_argument("--detector", choices=["haar", "insightface"],
                   default=os.getenv("FACE_DETECTOR", "haar"))
    p.add_argument("--sr_model", default=os.getenv("SR_MODEL_PATH"),
                   help="EDSR/LapSRN model file (.pb)")
    p.add_argument("--sr_scale", type=float, default=float(os.getenv("SR_SCALE", "2.0")),
                   help="Super-resolution scale, 2|3|4")
    p.add_argument("--sharpen", type=float, default=float(os.getenv("SHARPEN_AMOUNT", "1.0")),
                   help="Unsharp-mask amount, 0..3 typical")
    return p


def main(argv: Optional[List[str]] = None) -> int:
    logging.basicConfig(
        level=os.getenv("LOG_LEVEL", "INFO"),
        format='%(asctime)s - %(name)-25s - %(levelname)-8s - %(message)s',
        datefmt='%H:%M:%S'
    )
    try:
        args = build_argparser().parse_args(argv)
    except SystemExit as exc:
        # argparse exits 0 for --help and 2 for bad usage
        return EXIT_OK if exc.code == 0 else EXIT_USAGE

    image_service = ImageService()

    try:
        img = image_service.load(args.input)
    except ImageDecodeError as err:
        print(f"Failed to read input image: {args.input}", file=sys.stderr)
        logger.debug(err.to_dict())
        return EXIT_UNREADABLE_INPUT

    try:
        detector = DetectorRepository().load(args.detector, cascade_path=args.cascade)
    except DetectorLoadError as err:
        print(err.message, file=sys.stderr)
        return EXIT_DETECTOR_LOAD

    model = None
    if args.sr_model:
        try:
            model = UpsamplingModelRepository.load(args.sr_model)
        except ModelNotFoundError as err:
            print(err.message, file=sys.stderr)
            return EXIT_USAGE

    params = EnhancementParameters(sharpen_amount=args.sharpen,
                                   sr_scale=args.sr_scale,
                                   upsampling_model=model)
    result = enhance_face(img, detector, params, image_service=image_service)
    if not result.enhanced:
        print("No face detected. Saving original to output.", file=sys.stderr)

    result.image.path = Path(args.output)
    try:
        image_service.save(result.image)
    except ImageEncodeError as err:
        print(err.message, file=sys.stderr)
        return EXIT_WRITE_FAILED

    print(f"Saved: {args.output}")
    return EXIT_OK


if __name__ == "__main__":
    sys.exit(main())
