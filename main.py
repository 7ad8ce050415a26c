import logging
from time import time

import cv2
import numpy as np

import orsa
from utils_helper import makeTwoViewScene


if __name__ == "__main__":
    logging.basicConfig(level=logging.INFO, format='%(name)s: %(message)s')

    w, h = 640, 480
    inlier_number, outlier_number = 200, 100
    matches, F_true = makeTwoViewScene(inlier_number, outlier_number, w, h, noise=0.5, seed=1)
    src_pts = matches[:, 0:2].astype(np.float32)
    dst_pts = matches[:, 2:4].astype(np.float32)

    # 输出合成数据信息
    print(f"Matches number = {len(matches)}")
    print(f"True inliers number = {inlier_number}", '\n')

    threshold = 1.0
    for method in ('FM-RANSAC', 'RANSAC', 'ORSA'):
        t = time()
        print(method)
        if method == 'FM-RANSAC':
            # OpenCV 的约定为 x2' * F * x1 = 0，转置后再比较
            F, mask = cv2.findFundamentalMat(src_pts, dst_pts, cv2.FM_RANSAC,
                                             ransacReprojThreshold=threshold, confidence=0.99)
            F = None if F is None else F[0:3].T
            inliers = [] if mask is None else np.flatnonzero(mask.ravel()).tolist()
        else:
            if method == 'RANSAC':
                result = orsa.ransacFundamental(matches, w, h, w, h, threshold, 10000, 0.99, seed=0)
            else:
                result = orsa.orsaFundamental(matches, w, h, w, h, 0.0, 10000, seed=0)
                print(f'log10(NFA) = {result.nfa:.2f}, threshold = {result.precision:.3f}')
            print(f'Status = {result.status.name}, iterations = {result.iterations}')
            F, inliers = result.F, result.inliers
        print('Elapsed time = ', time() - t)
        print('Inliers number = ', len(inliers))
        if F is not None:
            print('Average/max error = %.4f/%.4f' % orsa.aggregate(matches, inliers, F))
            print('Error on true inliers = %.4f/%.4f' % orsa.aggregate(matches, range(inlier_number), F))
        print()
