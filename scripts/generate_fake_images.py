"""Render sample screenshots containing fake contact details.

Usage:
    python scripts/generate_fake_images.py [output_dir]
"""

import os
import sys
from datetime import date

from PIL import Image, ImageDraw, ImageFont


def _font(size: int):
    for name in ("DejaVuSans.ttf", "Arial.ttf", "Helvetica.ttc"):
        try:
            return ImageFont.truetype(name, size)
        except OSError:
            continue
    return ImageFont.load_default()


def write_image(path: str, lines, font_size=28, left=40, top=40, leading=48):
    width = 1200
    height = top * 2 + leading * len(lines)
    img = Image.new("RGB", (width, height), (255, 255, 255))
    draw = ImageDraw.Draw(img)
    font = _font(font_size)
    for i, line in enumerate(lines):
        draw.text((left, top + i * leading), line, fill=(20, 20, 20), font=font)
    img.save(path, format="PNG")


def main(output_dir: str = "data/in"):
    os.makedirs(output_dir, exist_ok=True)
    today = date.today().strftime("%Y-%m-%d")

    datasets = {
        "contact_card.png": [
            "Employee Record",
            f"Date: {today}",
            "Name: John A. Doe",
            "Email: john.doe@example.com",
            "Phone: (415) 555-0123",
            "Website: https://johndoe.example.com",
        ],
        "chat_screenshot.png": [
            "Maria: ping me at mailto:maria.q@example.co.uk",
            "Alex: or call +1 202-555-0188 after six",
            "Maria: the doc is at www.example.org/shared/plan",
            "Alex: ok, see you tomorrow",
        ],
        "invoice.png": [
            "Invoice #INV-10023",
            f"Date: {today}",
            "Billing Email: alex.johnson@contoso.com",
            "Billing Phone: 212-555-0199",
            "Amount Due: $1,245.77",
        ],
        "resume_header.png": [
            "Curriculum Vitae - Priya Sharma",
            "Email: priya.sharma+jobs@gmail.com",
            "Phone: 650.555.0007",
            "LinkedIn: linkedin.com/in/priyasharma",
        ],
    }

    for filename, lines in datasets.items():
        path = os.path.join(output_dir, filename)
        write_image(path, lines)


if __name__ == "__main__":
    main(*sys.argv[1:2])
